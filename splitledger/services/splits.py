from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal
from typing import Optional, Union

from splitledger.errors import InvalidSplitInput
from splitledger.models import SplitType
from splitledger.services.money import ZERO, Number, round_money, to_decimal


def _money(value: Number, what: str) -> Decimal:
    try:
        d = to_decimal(value)
    except TypeError as e:
        raise InvalidSplitInput(f"{what} must be a number.") from e
    if not d.is_finite():
        raise InvalidSplitInput(f"{what} must be finite.")
    return d


def compute_splits(
    total_amount: Number,
    split_type: Union[SplitType, str],
    participants: Iterable[str],
    weights: Optional[Mapping[str, Number]] = None,
) -> dict[str, Decimal]:
    """
    Owed share per participant, keyed in participant order.

    equal:      total / n, each share rounded on its own. The rounding
                remainder is not redistributed, so 100 / 3 gives 3 x 33.33.
    unequal:    weights are the owed amounts themselves.
    percentage: weights are percents of the total (not checked to sum to 100).
    shares:     weights are relative counts; divided by the sum of all weights.

    Missing weights count as 0.
    """

    total = _money(total_amount, "Total amount")
    if total <= 0:
        raise InvalidSplitInput("Total amount must be positive.")

    try:
        kind = SplitType(split_type)
    except ValueError as e:
        raise InvalidSplitInput(f"Unknown split type: {split_type!r}") from e

    # Keep first occurrence order; a repeated id is one participant.
    people = list(dict.fromkeys(participants))
    if not people:
        raise InvalidSplitInput("At least one participant is required.")

    if kind is SplitType.EQUAL:
        share = round_money(total / len(people))
        return {mid: share for mid in people}

    if weights is None:
        raise InvalidSplitInput(f"Weights are required for a {kind.value} split.")

    w: dict[str, Decimal] = {}
    for mid, raw in weights.items():
        value = _money(raw, f"Weight for {mid!r}")
        if value < 0:
            raise InvalidSplitInput(f"Weight for {mid!r} must not be negative.")
        w[mid] = value

    if kind is SplitType.UNEQUAL:
        return {mid: w.get(mid, ZERO) for mid in people}

    if kind is SplitType.PERCENTAGE:
        return {mid: round_money(total * w.get(mid, ZERO) / 100) for mid in people}

    total_shares = sum(w.values(), ZERO)
    if total_shares == 0:
        raise InvalidSplitInput("Shares must add up to more than zero.")
    return {mid: round_money(total * w.get(mid, ZERO) / total_shares) for mid in people}
