# relations/services/directory.py

"""
RELATIONS DIRECTORY (READ SIDE)

list_relations() filters, searches and sorts the WHOLE matching set in the
database, counts it, and only then slices the requested page. The total is
always the size of the filtered set, never of the page.

Filters:
- relation_type "client" also matches "both"; "supplier" also matches "both"
- "all" (or empty) disables a filter
- inactive relations are excluded unless status is given or include_inactive=True

Sorting:
- sort_by="<field>_<asc|desc>", default "use_count_desc"
- empty/NULL values always sort last
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db.models import F, Q, QuerySet, Value
from django.db.models.functions import Lower, NullIf

from relations.models import Relation

DEFAULT_SORT = "use_count_desc"
DEFAULT_PAGE_SIZE = 15

SORTABLE_FIELDS = {
    "name",
    "code",
    "phone",
    "country",
    "province",
    "use_count",
    "created_at",
    "updated_at",
}
TEXT_SORT_FIELDS = {"name", "code", "phone", "country", "province"}

# camelCase keys used by older clients
SORT_ALIASES = {"useCount": "use_count", "createdAt": "created_at", "updatedAt": "updated_at"}


def _relation_types_for(relation_type: str | None) -> list[str] | None:
    value = (relation_type or "").strip().lower()
    if not value or value == "all":
        return None
    if value == Relation.RelationType.CLIENT:
        return [Relation.RelationType.CLIENT, Relation.RelationType.BOTH]
    if value == Relation.RelationType.SUPPLIER:
        return [Relation.RelationType.SUPPLIER, Relation.RelationType.BOTH]
    return [value]


def _is_set(value) -> bool:
    return bool(value) and str(value).strip().lower() != "all"


def parse_sort(sort_by: str | None) -> tuple[str, bool]:
    """Return (field, descending). Unknown fields fall back to the default sort."""
    raw = (sort_by or DEFAULT_SORT).strip()
    field, _, direction = raw.rpartition("_")
    if direction.lower() not in ("asc", "desc"):
        field, direction = raw, "asc"

    field = SORT_ALIASES.get(field, field)
    if field not in SORTABLE_FIELDS:
        return parse_sort(DEFAULT_SORT)

    return field, direction.lower() == "desc"


def _ordered(qs: QuerySet, sort_by: str | None) -> QuerySet:
    field, descending = parse_sort(sort_by)

    if field in TEXT_SORT_FIELDS:
        # blank strings count as missing values
        expr = Lower(NullIf(F(field), Value("")))
    else:
        expr = F(field)

    order = expr.desc(nulls_last=True) if descending else expr.asc(nulls_last=True)
    return qs.order_by(order, "name", "id")


def filtered_relations(
    *,
    relation_type: str | None = None,
    payment_type: str | None = None,
    status: str | None = None,
    include_inactive: bool = False,
    country: str | None = None,
    province: str | None = None,
    search: str | None = None,
) -> QuerySet:
    qs = Relation.objects.all()

    types = _relation_types_for(relation_type)
    if types:
        qs = qs.filter(relation_type__in=types)

    if _is_set(payment_type):
        qs = qs.filter(payment_type=payment_type)

    if _is_set(status):
        qs = qs.filter(status=status)
    elif not include_inactive:
        qs = qs.filter(status=Relation.Status.ACTIVE)

    if _is_set(country):
        qs = qs.filter(country=country)
    if _is_set(province):
        qs = qs.filter(province=province)

    term = (search or "").strip()
    if term:
        qs = qs.filter(
            Q(name__icontains=term) | Q(phone__icontains=term) | Q(code__icontains=term)
        )

    return qs


def list_relations(
    *,
    relation_type: str | None = None,
    payment_type: str | None = None,
    status: str | None = None,
    include_inactive: bool = False,
    country: str | None = None,
    province: str | None = None,
    search: str | None = None,
    sort_by: str = DEFAULT_SORT,
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    all: bool = False,
) -> tuple[list[Relation], int]:
    qs = _ordered(
        filtered_relations(
            relation_type=relation_type,
            payment_type=payment_type,
            status=status,
            include_inactive=include_inactive,
            country=country,
            province=province,
            search=search,
        ),
        sort_by,
    )

    total = qs.count()

    if all:
        return list(qs), total

    page = max(int(page or 1), 1)
    limit = max(int(limit or DEFAULT_PAGE_SIZE), 1)
    start = (page - 1) * limit
    return list(qs[start : start + limit]), total


def search_relations(
    *,
    search: str | None = None,
    include_inactive: bool = False,
    relation_type: str | None = None,
) -> list[dict]:
    """Options for pickers: {value, label, relation_type, payment_type}."""
    relations, _ = list_relations(
        search=search,
        include_inactive=include_inactive,
        relation_type=relation_type,
        all=True,
    )
    return [
        {
            "value": str(r.id),
            "label": r.label,
            "relation_type": r.relation_type,
            "payment_type": r.payment_type,
        }
        for r in relations
    ]


def get_relation(relation_id) -> Relation | None:
    try:
        return Relation.objects.filter(pk=relation_id).first()
    except (ValueError, ValidationError):
        # not a UUID
        return None
