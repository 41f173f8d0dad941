# batches/services/expiry.py

"""
EXPIRY CLASSIFIER

Pure function: expiry date + reference "now" -> risk class.

Evaluation order (mutually exclusive):
    absent -> NONE
    date <  now                 -> EXPIRED
    now <= date <= now + 30d    -> NEAR_EXPIRY
    otherwise                   -> NORMAL

`now` is always passed in; nothing here samples the clock.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from enum import Enum
from typing import Optional

NEAR_EXPIRY_WINDOW = timedelta(days=30)


class ExpiryClass(str, Enum):
    NONE = "none"
    NORMAL = "normal"
    NEAR_EXPIRY = "near_expiry"
    EXPIRED = "expired"


def as_date(value) -> Optional[date]:
    """Reduce a datetime to its calendar date; pass dates / None through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def is_expired(expiry_date, now) -> bool:
    expiry = as_date(expiry_date)
    return expiry is not None and expiry < as_date(now)


def classify_expiry(expiry_date, now) -> ExpiryClass:
    expiry = as_date(expiry_date)
    if expiry is None:
        return ExpiryClass.NONE

    today = as_date(now)
    if today is None:
        raise ValueError("now is required")

    if expiry < today:
        return ExpiryClass.EXPIRED

    if expiry <= today + NEAR_EXPIRY_WINDOW:
        return ExpiryClass.NEAR_EXPIRY

    return ExpiryClass.NORMAL
