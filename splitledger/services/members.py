from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Optional

from splitledger.errors import MemberAlreadyInGroup, UnknownMemberError
from splitledger.models import Group, GroupMember, Member
from splitledger.schemas import CreateGroupInput


def index_members(members: Iterable[Member]) -> dict[str, Member]:
    out: dict[str, Member] = {}
    for m in members:
        out.setdefault(m.id, m)
    return out


def ensure_members(member_ids: Iterable[str], members: Iterable[Member]) -> None:
    known = index_members(members)
    for mid in member_ids:
        if mid not in known:
            raise UnknownMemberError(mid)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def build_group(
    data: CreateGroupInput,
    *,
    created_by: Member,
    group_id: Optional[str] = None,
) -> tuple[Group, GroupMember]:
    """New group plus the creator's membership; the creator is always the first member."""

    group = Group(
        id=group_id or str(uuid.uuid4()),
        name=data.name.strip(),
        description=data.description,
        currency=data.currency.upper(),
    )
    return group, GroupMember(group_id=group.id, member_id=created_by.id, joined_at=_utc_now())


def add_group_member(
    group_id: str,
    *,
    email: str,
    profiles: Iterable[Member],
    memberships: Iterable[GroupMember],
) -> GroupMember:
    wanted = email.strip().lower()
    profile = next((p for p in profiles if p.email and p.email.lower() == wanted), None)
    if profile is None:
        raise UnknownMemberError(email)

    if any(gm.group_id == group_id and gm.member_id == profile.id for gm in memberships):
        raise MemberAlreadyInGroup(profile.id)
    return GroupMember(group_id=group_id, member_id=profile.id, joined_at=_utc_now())


def remove_group_member(group_id: str, member_id: str, memberships: Iterable[GroupMember]) -> list[GroupMember]:
    # Removing someone who is not in the group is a no-op.
    return [gm for gm in memberships if not (gm.group_id == group_id and gm.member_id == member_id)]
