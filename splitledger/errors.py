from __future__ import annotations


class LedgerError(ValueError):
    """Base class for every error the ledger raises on bad input."""


class InvalidSplitInput(LedgerError):
    pass


class InvalidBalanceInput(LedgerError):
    pass


class UnknownMemberError(LedgerError):
    def __init__(self, member_id: str) -> None:
        super().__init__(f"Member {member_id!r} does not belong to this group.")
        self.member_id = member_id


class MemberAlreadyInGroup(LedgerError):
    def __init__(self, member_id: str) -> None:
        super().__init__(f"Member {member_id!r} is already in this group.")
        self.member_id = member_id
