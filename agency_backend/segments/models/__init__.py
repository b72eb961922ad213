from .period import PeriodPartner, SegmentPeriod
from .entry import SegmentEntry, SegmentPartnerShare

__all__ = [
    "PeriodPartner",
    "SegmentEntry",
    "SegmentPartnerShare",
    "SegmentPeriod",
]
