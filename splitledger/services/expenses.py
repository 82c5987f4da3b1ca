from __future__ import annotations

import uuid
from typing import Optional

from splitledger.models import Expense, ExpenseSplit, Member
from splitledger.schemas import CreateExpenseInput
from splitledger.services.members import ensure_members
from splitledger.services.splits import compute_splits


def build_expense(
    data: CreateExpenseInput,
    *,
    group_id: str,
    members: list[Member],
    expense_id: Optional[str] = None,
) -> tuple[Expense, list[ExpenseSplit]]:
    """New expense plus one split row per participant. Nothing is stored."""

    participants = list(data.participants) or [m.id for m in members]
    ensure_members([data.paid_by_member_id, *participants], members)

    shares = compute_splits(data.amount, data.split_type, participants, data.weights)

    expense = Expense(
        id=expense_id or str(uuid.uuid4()),
        group_id=group_id,
        description=data.description.strip(),
        amount=data.amount,
        paid_by_member_id=data.paid_by_member_id,
        split_type=data.split_type,
        category=data.category,
        expense_date=data.expense_date,
        notes=(data.notes.strip() if data.notes and data.notes.strip() else None),
    )
    splits = [ExpenseSplit(expense_id=expense.id, member_id=mid, amount=amt) for mid, amt in shares.items()]
    return expense, splits


def soft_delete_expense(expense: Expense) -> Expense:
    return expense.model_copy(update={"is_deleted": True})
