"""Action classification for trade-history rows."""

from __future__ import annotations

from typing import Literal

ActionKind = Literal["funding", "trade", "ignored"]

# Substrings, matched case-insensitively. "Balance" also covers opening-balance rows.
FUNDING_KEYWORDS = ("deposit", "balance")
# Exact, case-sensitive matches
TRADE_ACTIONS = frozenset({"Buy", "Sell"})


def classify_action(action: str | None) -> ActionKind:
    """Classify an ``Action`` cell.

    Funding keywords are checked first, so an action such as
    "Balance Buy" counts as funding. Anything that is neither funding nor an
    exact "Buy"/"Sell" is ignored.
    """
    if not action:
        return "ignored"
    text = str(action)
    lowered = text.lower()
    if any(keyword in lowered for keyword in FUNDING_KEYWORDS):
        return "funding"
    if text in TRADE_ACTIONS:
        return "trade"
    return "ignored"
