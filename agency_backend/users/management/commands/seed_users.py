# users/management/commands/seed_users.py

from __future__ import annotations

from dataclasses import dataclass

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction

from permissions.roles import ROLE_ACCOUNTANT, ROLE_ADMIN, ROLE_AGENT, ROLE_MANAGER


@dataclass(frozen=True)
class SeedUserSpec:
    role: str
    email: str
    first_name: str = ""
    last_name: str = ""
    box_account_code: str = ""


SEED_USERS = [
    SeedUserSpec(ROLE_ADMIN, "admin@example.com", "System", "Admin"),
    SeedUserSpec(ROLE_MANAGER, "manager@example.com", "Branch", "Manager", "1010"),
    SeedUserSpec(ROLE_ACCOUNTANT, "accountant@example.com", "Head", "Accountant", "1010"),
    SeedUserSpec(ROLE_AGENT, "agent@example.com", "Sales", "Agent", "1011"),
]


class Command(BaseCommand):
    help = "Seed one back-office user per role (idempotent)."

    def add_arguments(self, parser):
        parser.add_argument(
            "--password",
            type=str,
            default="Pass1234!",
            help="Password for seeded users (default: Pass1234!)",
        )
        parser.add_argument(
            "--force-password",
            action="store_true",
            help="Reset password for existing seeded users too.",
        )

    @transaction.atomic
    def handle(self, *args, **options):
        password = options.get("password") or ""
        force_password = bool(options.get("force_password"))

        if len(password) < 6:
            raise CommandError("--password must be at least 6 characters.")

        User = get_user_model()
        created_count = 0
        updated_count = 0

        for spec in SEED_USERS:
            is_admin = spec.role == ROLE_ADMIN
            user = User.objects.filter(email=spec.email).first()

            if user is None:
                User.objects.create_user(
                    email=spec.email,
                    password=password,
                    role=spec.role,
                    first_name=spec.first_name,
                    last_name=spec.last_name,
                    box_account_code=spec.box_account_code,
                    is_staff=True,
                    is_superuser=is_admin,
                )
                created_count += 1
                continue

            user.role = spec.role
            user.first_name = spec.first_name
            user.last_name = spec.last_name
            user.box_account_code = spec.box_account_code
            user.is_staff = True
            user.is_superuser = is_admin
            user.is_active = True
            if force_password:
                user.set_password(password)
            user.save()
            updated_count += 1

        self.stdout.write(
            self.style.SUCCESS(
                f"Seed users complete: created={created_count} updated={updated_count}"
            )
        )
