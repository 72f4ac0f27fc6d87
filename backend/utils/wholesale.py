# backend/utils/wholesale.py
"""
Strict normalization of wholesale pricing tiers.

Accepted inputs are a list of tiers, an object ``{"tiers": [...]}`` or the
JSON-encoded text of either. Every tier is reduced to its finite numeric
``minQty``, ``discountPercent`` and ``pricePerUnit`` fields; tiers left without
any of them are dropped, and an empty result means "no rules" (``None``).
"""
import json
import math
from typing import Any, List, Optional

TIER_FIELDS = ("minQty", "discountPercent", "pricePerUnit")


class WholesaleRulesError(ValueError):
    """Raised when wholesale rules cannot be decoded or have the wrong shape."""


def _finite_number(value: Any) -> Optional[float]:
    # Stricter than JavaScript Number(): booleans and blank strings are not 1/0
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def normalize_wholesale_rules(value: Any, field: str = "wholesaleRules") -> Optional[List[dict]]:
    if value is None or value == "":
        return None

    # Multipart/textarea input arrives as text: decode it exactly once
    if isinstance(value, (str, bytes)):
        try:
            value = json.loads(value)
        except ValueError:
            raise WholesaleRulesError(f"{field} must be valid JSON")

    if isinstance(value, list):
        tiers = value
    elif isinstance(value, dict) and isinstance(value.get("tiers"), list):
        tiers = value["tiers"]
    else:
        raise WholesaleRulesError(f"{field} must be an array or an object {{ tiers: [...] }}")

    normalized = []
    for tier in tiers:
        if not isinstance(tier, dict):
            continue
        clean = {}
        for key in TIER_FIELDS:
            number = _finite_number(tier.get(key))
            if number is not None:
                clean[key] = number
        if clean:
            normalized.append(clean)

    return normalized or None
