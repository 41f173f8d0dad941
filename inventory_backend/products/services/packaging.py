# products/services/packaging.py

"""
PACKAGING CALCULATOR

Converts a bulk quantity and a per-pack weight into a pack count.

Rules:
- Both inputs strictly positive -> ceil(total / per_pack)
- Either input absent or zero   -> None ("unset", not 0)
- Negative or non-numeric input -> InvalidInput

Product.save() calls compute_packs() on every write, so a stored
calculated_packs can never go stale relative to its inputs.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_CEILING

from products.services.exceptions import InvalidInput


def _to_decimal(value, *, field_name: str) -> Decimal | None:
    if value is None or value == "":
        return None

    if isinstance(value, bool):
        raise InvalidInput(f"{field_name} must be a number")

    try:
        d = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as exc:
        raise InvalidInput(f"{field_name} must be a number") from exc

    if not d.is_finite():
        raise InvalidInput(f"{field_name} must be a finite number")

    if d < 0:
        raise InvalidInput(f"{field_name} cannot be negative")

    return d


def compute_packs(total_quantity, per_pack_weight) -> int | None:
    """
    Pack count for `total_quantity` split into packs of `per_pack_weight`.

    >>> compute_packs(1000, 60)
    17
    >>> compute_packs(0, 60) is None
    True
    """
    total = _to_decimal(total_quantity, field_name="total_quantity")
    per_pack = _to_decimal(per_pack_weight, field_name="per_pack_weight")

    if total is None or per_pack is None:
        return None

    if total <= 0 or per_pack <= 0:
        return None

    return int((total / per_pack).to_integral_value(rounding=ROUND_CEILING))
