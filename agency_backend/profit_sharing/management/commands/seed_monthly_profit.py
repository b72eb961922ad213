# profit_sharing/management/commands/seed_monthly_profit.py

from decimal import Decimal, InvalidOperation

from django.core.management.base import BaseCommand, CommandError

from common.exceptions import DomainValidationError
from profit_sharing.services.monthly_profits import seed_monthly_profit


class Command(BaseCommand):
    help = "Set the system profit of a month (YYYY-MM). Safe to run repeatedly."

    def add_arguments(self, parser):
        parser.add_argument("month_id")
        parser.add_argument("profit")
        parser.add_argument("--currency", default=None)

    def handle(self, *args, **options):
        try:
            profit = Decimal(options["profit"])
        except InvalidOperation as exc:
            raise CommandError(f"Invalid profit: {options['profit']}") from exc

        try:
            obj = seed_monthly_profit(options["month_id"], profit, options["currency"])
        except DomainValidationError as exc:
            raise CommandError(str(exc)) from exc

        self.stdout.write(self.style.SUCCESS(f"✅ {obj.id}: {obj.total_profit} {obj.currency}"))
