# PATH: accounting/api/view.py

"""
PATH: accounting/api/view.py

ACCOUNTING API VIEWSETS (READ-ONLY / AUDIT SAFE)

- Journal entries (vouchers) with their lines
- Ledger entries, filterable with django-filter:
    /api/accounting/ledger-entries/?journal_entry=30
    /api/accounting/ledger-entries/?account__code=1000
    /api/accounting/ledger-entries/?journal_entry__currency=USD
    /api/accounting/ledger-entries/?source=SEGMENT_PERIOD:12

Both require capability reports.view_accounting. Ledger rows are append-only,
so only GET/HEAD/OPTIONS are exposed.
"""

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.viewsets import ReadOnlyModelViewSet

from accounting.api.serializers import JournalEntrySerializer, LedgerEntrySerializer
from accounting.models.journal import JournalEntry
from accounting.models.ledger import LedgerEntry
from permissions.roles import CAP_REPORTS_VIEW_ACCOUNTING, HasCapability


@extend_schema(tags=["accounting"])
class JournalEntryViewSet(ReadOnlyModelViewSet):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_REPORTS_VIEW_ACCOUNTING
    serializer_class = JournalEntrySerializer
    http_method_names = ["get", "head", "options"]

    queryset = (
        JournalEntry.objects.filter(is_posted=True)
        .prefetch_related("ledger_entries__account")
        .order_by("-posted_at", "-id")
    )
    filterset_fields = ["source_type", "currency", "reference"]


@extend_schema(tags=["accounting"])
class LedgerEntryViewSet(ReadOnlyModelViewSet):
    permission_classes = [IsAuthenticated, HasCapability]
    required_capability = CAP_REPORTS_VIEW_ACCOUNTING
    serializer_class = LedgerEntrySerializer
    http_method_names = ["get", "head", "options"]

    queryset = LedgerEntry.objects.select_related("journal_entry", "account").order_by(
        "-created_at", "-id"
    )
    filterset_fields = ["journal_entry", "account__code", "entry_type", "journal_entry__currency"]

    def get_queryset(self):
        qs = super().get_queryset()
        # ?source=MANUAL_DISTRIBUTION:<id> returns every revision's lines
        source = (self.request.query_params.get("source") or "").strip()
        if ":" in source:
            source_type, source_id = source.split(":", 1)
            qs = qs.for_source(source_type, source_id)
        return qs
