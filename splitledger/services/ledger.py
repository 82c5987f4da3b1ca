from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from splitledger.errors import InvalidBalanceInput
from splitledger.models import GroupSnapshot
from splitledger.services.money import EPSILON, ZERO, Number, round_money, to_decimal

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MemberBalance:
    member_id: str
    member: Any
    paid: Decimal
    owed: Decimal
    balance: Decimal  # positive is owed money, negative owes


@dataclass(frozen=True)
class SettlementSuggestion:
    from_member_id: str  # debtor
    to_member_id: str  # creditor
    amount: Decimal


@dataclass(frozen=True)
class BalanceReport:
    group_id: str
    currency: str
    total_spent: Decimal
    balances: list[MemberBalance]
    suggestions: list[SettlementSuggestion]


def _finite(value: Number, what: str) -> Decimal:
    try:
        d = to_decimal(value)
    except TypeError as e:
        raise InvalidBalanceInput(f"{what} is not a number: {value!r}") from e
    if not d.is_finite():
        raise InvalidBalanceInput(f"{what} is not finite: {value!r}")
    return d


def _done(value: Decimal) -> bool:
    # Strictly below one cent; a party left at exactly 0.01 still gets matched.
    return abs(value) < EPSILON


def compute_group_total(expenses: Iterable[Any]) -> Decimal:
    return sum((_finite(e.amount, f"Expense {e.id} amount") for e in expenses if not e.is_deleted), ZERO)


def compute_balances(expenses: Iterable[Any], splits: Iterable[Any], members: Iterable[Any]) -> list[MemberBalance]:
    """
    Paid, owed and net balance per member, in roster order.

    Expenses, splits and members are read by attribute, so ORM rows and
    the pydantic records in splitledger.models both work. References to
    members outside the roster are dropped, not raised.
    """

    roster: dict[str, Any] = {}
    for m in members:
        roster.setdefault(m.id, m)
    paid: dict[str, Decimal] = {mid: ZERO for mid in roster}
    owed: dict[str, Decimal] = {mid: ZERO for mid in roster}

    deleted_ids: set[str] = set()
    for e in expenses:
        if e.is_deleted:
            deleted_ids.add(e.id)
            continue
        if e.paid_by_member_id not in paid:
            logger.debug("Skipping expense %s: payer %s is not a member", e.id, e.paid_by_member_id)
            continue
        paid[e.paid_by_member_id] += _finite(e.amount, f"Expense {e.id} amount")

    for s in splits:
        if s.expense_id in deleted_ids:
            continue
        if s.member_id not in owed:
            logger.debug("Skipping split of expense %s: %s is not a member", s.expense_id, s.member_id)
            continue
        owed[s.member_id] += _finite(s.amount, f"Split of expense {s.expense_id} amount")

    return [
        MemberBalance(
            member_id=mid,
            member=m,
            paid=paid[mid],
            owed=owed[mid],
            balance=paid[mid] - owed[mid],
        )
        for mid, m in roster.items()
    ]


def apply_settlements(balances: Iterable[MemberBalance], settlements: Iterable[Any]) -> dict[str, Decimal]:
    """Net balance per member after counting transfers that already happened."""

    adjusted: dict[str, Decimal] = {}
    for b in balances:
        adjusted[b.member_id] = _finite(b.balance, f"Balance of {b.member_id}")

    for s in settlements:
        if s.from_member_id not in adjusted and s.to_member_id not in adjusted:
            continue
        amount = _finite(s.amount, f"Settlement {getattr(s, 'id', '?')} amount")
        # Paying reduces the payer's debt and the payee's credit.
        if s.from_member_id in adjusted:
            adjusted[s.from_member_id] += amount
        if s.to_member_id in adjusted:
            adjusted[s.to_member_id] -= amount
    return adjusted


def compute_settlements(
    balances: Sequence[MemberBalance],
    existing_settlements: Iterable[Any] = (),
) -> list[SettlementSuggestion]:
    """
    Greedy transfer plan: the largest creditor is matched with the largest
    debtor until one side runs out. This keeps the plan short in practice but
    does not search for the true minimum.
    """

    adjusted = apply_settlements(balances, existing_settlements)

    creditors: list[list[Any]] = [[mid, bal] for mid, bal in adjusted.items() if bal > EPSILON]
    debtors: list[list[Any]] = [[mid, bal] for mid, bal in adjusted.items() if bal < -EPSILON]

    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1])

    out: list[SettlementSuggestion] = []
    i = 0
    j = 0
    while i < len(creditors) and j < len(debtors):
        c_id, recv = creditors[i]
        d_id, owe = debtors[j]
        amt = min(recv, -owe)
        out.append(SettlementSuggestion(from_member_id=d_id, to_member_id=c_id, amount=round_money(amt)))
        recv -= amt
        owe += amt
        creditors[i][1] = recv
        debtors[j][1] = owe
        if _done(recv):
            i += 1
        if _done(owe):
            j += 1
    return out


def compute_report(snapshot: GroupSnapshot) -> BalanceReport:
    balances = compute_balances(snapshot.expenses, snapshot.splits, snapshot.members)
    suggestions = compute_settlements(balances, snapshot.settlements)
    logger.debug(
        "Report for group %s: %d members, %d suggestions",
        snapshot.group.id,
        len(balances),
        len(suggestions),
    )
    return BalanceReport(
        group_id=snapshot.group.id,
        currency=snapshot.group.currency,
        total_spent=compute_group_total(snapshot.expenses),
        balances=balances,
        suggestions=suggestions,
    )
