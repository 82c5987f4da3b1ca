from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Optional

from splitledger.cli.text import format_currency, format_signed, member_label
from splitledger.services.ledger import BalanceReport
from splitledger.services.money import is_settled


def _name(members_by_id: Mapping[str, Any], member_id: str) -> str:
    m = members_by_id.get(member_id)
    return member_label(m) if m is not None else member_id


def render_report(
    report: BalanceReport,
    members_by_id: Mapping[str, Any],
    *,
    title: Optional[str] = None,
    max_rows: int = 50,
) -> str:
    cur = report.currency
    head = f"Balances: {title}" if title else "Balances"

    lines_bal: list[str] = []
    for b in report.balances[:max_rows]:
        name = _name(members_by_id, b.member_id)
        if is_settled(b.balance):
            state = "settled"
        elif b.balance > 0:
            state = "gets back"
        else:
            state = "owes"
        lines_bal.append(
            f"{name:<16} paid {format_currency(b.paid, cur):>12}  owed {format_currency(b.owed, cur):>12}"
            f"  {format_signed(b.balance, cur):>12} ({state})"
        )
    if len(report.balances) > max_rows:
        lines_bal.append(f"... and {len(report.balances) - max_rows} more")
    if not lines_bal:
        lines_bal = ["No balances to show."]

    lines_settle: list[str] = []
    for s in report.suggestions[:max_rows]:
        frm = _name(members_by_id, s.from_member_id)
        to = _name(members_by_id, s.to_member_id)
        lines_settle.append(f"{frm} → {to}: {format_currency(s.amount, cur)}")
    if len(report.suggestions) > max_rows:
        lines_settle.append(f"... and {len(report.suggestions) - max_rows} more")
    if not lines_settle:
        lines_settle = ["All settled up! No one owes anything to anyone."]

    return (
        f"{head}\n\n"
        f"Total spent: {format_currency(report.total_spent, cur)}\n\n"
        f"Member balances:\n"
        f"{chr(10).join(lines_bal)}\n\n"
        f"Suggested transfers:\n"
        f"{chr(10).join(lines_settle)}\n"
    )


def render_splits(shares: Mapping[str, Decimal], currency: str, members_by_id: Mapping[str, Any]) -> str:
    lines = [f"{_name(members_by_id, mid):<16} {format_currency(amt, currency):>12}" for mid, amt in shares.items()]
    total = sum(shares.values(), Decimal(0))
    lines.append(f"{'Total':<16} {format_currency(total, currency):>12}")
    return "\n".join(lines) + "\n"
