# profit_sharing/services/partners.py

from __future__ import annotations

from django.core.exceptions import ValidationError

from common.exceptions import DomainValidationError
from relations.models import Relation


def load_partner(partner_id) -> Relation:
    try:
        relation = Relation.objects.filter(pk=partner_id).first()
    except (ValueError, ValidationError):
        relation = None
    if relation is None:
        raise DomainValidationError(f"Partner {partner_id} not found")
    return relation


def load_partners(partner_ids) -> dict[str, Relation]:
    ids = [str(i) for i in partner_ids]
    try:
        found = {str(r.pk): r for r in Relation.objects.filter(pk__in=ids)}
    except (ValueError, ValidationError) as exc:
        raise DomainValidationError("Invalid partner id") from exc

    missing = [i for i in ids if i not in found]
    if missing:
        raise DomainValidationError(f"Partner not found: {', '.join(missing)}")
    return found
