"""Map upstream records onto the fixed output schema."""
from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Tuple

from .models import NormalizedItem

PLACEHOLDER = "-"

# canonical field -> (candidate source keys in priority order, default)
FIELD_CANDIDATES: Tuple[Tuple[str, Sequence[str], str], ...] = (
    ("productTitle", ("title", "name", "productTitle"), PLACEHOLDER),
    ("optionId", ("optionId", "option_id", "optionID"), PLACEHOLDER),
    ("colourVariantId", ("colourVariantId", "colour_variant_id", "colourVariantID"), PLACEHOLDER),
    ("url", ("url", "productUrl", "product_url", "uri"), ""),
    ("superCategory", ("superCategory", "super_category", "category"), PLACEHOLDER),
    ("department", ("department", "cpDepartment", "cp_department", "departmentName"), PLACEHOLDER),
    ("keySection", ("keySection", "cpKeySection", "cp_key_section", "section"), PLACEHOLDER),
    (
        "preferredCategory",
        ("preferredCategory", "cpPrefCategory", "cp_pref_category", "prefCategory"),
        PLACEHOLDER,
    ),
)


def _as_text(value: Any) -> Optional[str]:
    # Only scalars count; booleans, mappings and sequences fall through to the next candidate.
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, (int, float)):
        return str(value)
    return None


def first_present(record: Mapping[str, Any], candidates: Sequence[str]) -> Optional[str]:
    for key in candidates:
        text = _as_text(record.get(key))
        if text is not None:
            return text
    return None


def normalize_record(record: Mapping[str, Any]) -> NormalizedItem:
    """Build a ``NormalizedItem`` from any upstream mapping. Never fails."""
    values = {}
    for field, candidates, default in FIELD_CANDIDATES:
        found = first_present(record, candidates)
        values[field] = default if found is None else found
    return NormalizedItem(**values)
