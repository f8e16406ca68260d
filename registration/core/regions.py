# registration/core/regions.py
"""
Static region table.

Each region label (exactly as shown in the form) maps to:
- key:    ascii identifier, used as folder name / DB partition key
- prefix: Arabic first letter of the region name, prepended to the
          per-region sequence number to build the submission ID

Prefixes repeat (مكة / المدينة, جازان / الجوف, حائل / الحدود الشمالية);
that is fine because every region has its own counter and its own folder.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional


@dataclass(frozen=True)
class Region:
    label: str
    key: str
    prefix: str


_REGIONS = (
    Region(label="منطقة الرياض", key="riyadh", prefix="ر"),
    Region(label="منطقة مكة المكرمة", key="makkah", prefix="م"),
    Region(label="منطقة المدينة المنورة", key="madinah", prefix="م"),
    Region(label="منطقة القصيم", key="qassim", prefix="ق"),
    Region(label="المنطقة الشرقية", key="eastern", prefix="ش"),  # الشرقية → ش
    Region(label="منطقة عسير", key="asir", prefix="ع"),
    Region(label="منطقة تبوك", key="tabuk", prefix="ت"),
    Region(label="منطقة حائل", key="hail", prefix="ح"),
    Region(label="منطقة الحدود الشمالية", key="northern", prefix="ح"),  # الحدود → ح
    Region(label="منطقة جازان", key="jazan", prefix="ج"),
    Region(label="منطقة نجران", key="najran", prefix="ن"),
    Region(label="منطقة الباحة", key="bahah", prefix="ب"),
    Region(label="منطقة الجوف", key="jouf", prefix="ج"),
)

# Read-only label → Region lookup
REGIONS: Mapping[str, Region] = MappingProxyType({r.label: r for r in _REGIONS})


def resolve_region(label: str) -> Optional[Region]:
    """Exact-match lookup; no trimming or case folding."""
    return REGIONS.get(label)


def list_regions() -> List[Region]:
    """Regions in display order (used to build the form)."""
    return list(_REGIONS)
