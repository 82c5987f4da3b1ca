from __future__ import annotations

from decimal import Decimal

from splitledger.models import Expense, ExpenseSplit, Member, Settlement
from splitledger.services.ledger import SettlementSuggestion, compute_balances, compute_settlements
from splitledger.services.splits import compute_splits


def example_equal_split_keeps_remainder() -> None:
    """
    Equal split rounds each share on its own.

      100.00 / 3 = 33.333... -> 33.33 each, 99.99 in total.

    The missing cent is not handed to anyone.
    """

    shares = compute_splits(Decimal("100.00"), "equal", ["a", "b", "c"])
    assert shares == {"a": Decimal("33.33"), "b": Decimal("33.33"), "c": Decimal("33.33")}
    assert sum(shares.values()) == Decimal("99.99")


def example_settle_up() -> None:
    """
    Balance sign:
      positive -> is owed
      negative -> owes

    Ann paid 90 for three, Ben already paid Ann 10 back.
    """

    members = [Member(id="ann"), Member(id="ben"), Member(id="cat")]
    expenses = [Expense(id="e1", group_id="g", amount=Decimal("90"), paid_by_member_id="ann")]
    splits = [ExpenseSplit(expense_id="e1", member_id=m.id, amount=Decimal("30")) for m in members]
    settlements = [
        Settlement(id="s1", group_id="g", from_member_id="ben", to_member_id="ann", amount=Decimal("10")),
    ]

    balances = compute_balances(expenses, splits, members)
    assert [b.balance for b in balances] == [Decimal("60"), Decimal("-30"), Decimal("-30")]

    suggestions = compute_settlements(balances, settlements)
    assert suggestions == [
        SettlementSuggestion(from_member_id="cat", to_member_id="ann", amount=Decimal("30.00")),
        SettlementSuggestion(from_member_id="ben", to_member_id="ann", amount=Decimal("20.00")),
    ]
