"""Amount and currency extraction from free-form price strings."""

from __future__ import annotations

import math
import re

RUPEE = "₹"

_RUPEE_ALIASES = {"rs", "rs.", "inr"}

# [marker] number [marker], e.g. "₹1,234.50", "Rs. 100", "50 USD"
_MONEY_PATTERN = re.compile(r"^\s*([^0-9\s]+)?\s*([0-9.,]+)\s*([^0-9\s]+)?\s*$")
_AMOUNT_PATTERN = re.compile(r"[0-9]+(?:[.,][0-9]+)?")


def parse_amount(text: str | None) -> tuple[float, str]:
    """Return ``(value, currency)`` for a price string.

    Never raises: anything unparseable gives ``(0.0, "")`` or a zero
    value with whatever currency marker was found.
    """
    text = (text or "").strip()
    if not text:
        return 0.0, ""

    match = _MONEY_PATTERN.match(text)
    if match:
        prefix = (match.group(1) or "").strip()
        suffix = (match.group(3) or "").strip()
        return _parse_value(match.group(2), prefix or suffix)

    currency = "".join(
        ch for ch in text if not (ch.isdigit() or ch in ".," or ch.isspace())
    )
    amount = _AMOUNT_PATTERN.search(text)
    if amount is None:
        return 0.0, ""
    return _parse_value(amount.group(0), currency)


def _parse_value(raw: str, currency: str) -> tuple[float, str]:
    try:
        value = float(raw.replace(",", ""))
    except ValueError:
        value = 0.0
    if not math.isfinite(value):
        value = 0.0
    return value, normalize_currency(currency)


def normalize_currency(marker: str) -> str:
    """Map Rupee spellings ("Rs.", "INR", "₹") to the Rupee sign."""
    marker = marker.strip()
    if not marker:
        return ""
    if RUPEE in marker:
        return RUPEE
    if marker.lower().strip(".") in _RUPEE_ALIASES:
        return RUPEE
    return marker


def round2(value: float) -> float:
    """Round to 2 decimals, halves away from zero."""
    return math.copysign(math.floor(abs(value) * 100 + 0.5) / 100, value)
