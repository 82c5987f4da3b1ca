from __future__ import annotations

import uuid
from typing import Optional

from splitledger.models import Member, Settlement
from splitledger.schemas import CreateSettlementInput
from splitledger.services.members import ensure_members


def build_settlement(
    data: CreateSettlementInput,
    *,
    group_id: str,
    members: list[Member],
    settlement_id: Optional[str] = None,
) -> Settlement:
    ensure_members([data.from_member_id, data.to_member_id], members)
    return Settlement(
        id=settlement_id or str(uuid.uuid4()),
        group_id=group_id,
        from_member_id=data.from_member_id,
        to_member_id=data.to_member_id,
        amount=data.amount,
        settlement_date=data.settlement_date,
        notes=(data.notes.strip() if data.notes and data.notes.strip() else None),
    )

