"""Domain service: human-facing order numbers.

Format: ``HM`` + two-digit year, month and day + a three-digit random
suffix, e.g. ``HM250115042``.  Only 1000 numbers exist per day, so the
generator alone is not collision-free; uniqueness is the store's job
(unique index) and the create-order handler retries on a conflict.
"""

from __future__ import annotations

import random
import re
from datetime import datetime

ORDER_NUMBER_PREFIX = "HM"
ORDER_NUMBER_PATTERN = re.compile(r"^HM\d{2}(0[1-9]|1[0-2])(0[1-9]|[12]\d|3[01])\d{3}$")


def generate_order_number(
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> str:
    """Build an order number for the calendar day of *now*.

    Aware datetimes are converted to the server's local zone first so the
    date part matches the storefront's business day.
    """
    moment = now or datetime.now()
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    suffix = (rng or random).randint(0, 999)
    return f"{ORDER_NUMBER_PREFIX}{moment:%y%m%d}{suffix:03d}"


def is_order_number(value: str) -> bool:
    return bool(ORDER_NUMBER_PATTERN.match(value))
