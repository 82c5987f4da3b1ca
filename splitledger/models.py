from __future__ import annotations

import enum
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from splitledger.config import settings


class SplitType(str, enum.Enum):
    EQUAL = "equal"
    UNEQUAL = "unequal"
    PERCENTAGE = "percentage"
    SHARES = "shares"


class ExpenseCategory(str, enum.Enum):
    FOOD = "food"
    TRANSPORT = "transport"
    ACCOMMODATION = "accommodation"
    ENTERTAINMENT = "entertainment"
    UTILITIES = "utilities"
    OTHER = "other"


class Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class Member(Record):
    id: str
    display_name: str = ""
    email: Optional[str] = None


class Group(Record):
    id: str
    name: str
    description: Optional[str] = None
    # Opaque label; amounts are never converted between currencies.
    currency: str = Field(default_factory=lambda: settings.default_currency)
    is_archived: bool = False


class GroupMember(Record):
    group_id: str
    member_id: str
    joined_at: Optional[datetime] = None


class Expense(Record):
    id: str
    group_id: str
    description: str = ""
    amount: Decimal = Field(gt=0)
    paid_by_member_id: str
    split_type: SplitType = SplitType.EQUAL
    category: ExpenseCategory = ExpenseCategory.OTHER
    expense_date: Optional[date] = None
    notes: Optional[str] = None
    is_deleted: bool = False


class ExpenseSplit(Record):
    expense_id: str
    member_id: str
    amount: Decimal = Field(ge=0)


class Settlement(Record):
    id: str
    group_id: str
    from_member_id: str  # payer
    to_member_id: str  # payee
    amount: Decimal = Field(gt=0)
    settlement_date: Optional[date] = None
    notes: Optional[str] = None


class GroupSnapshot(Record):
    """Everything one balance report needs, already fetched and scoped to a group."""

    group: Group
    members: list[Member] = Field(default_factory=list)
    expenses: list[Expense] = Field(default_factory=list)
    splits: list[ExpenseSplit] = Field(default_factory=list)
    settlements: list[Settlement] = Field(default_factory=list)
