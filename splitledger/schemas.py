from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, model_validator

from splitledger.config import settings
from splitledger.models import ExpenseCategory, SplitType


class CreateGroupInput(BaseModel):
    name: str = Field(min_length=3, max_length=50)
    description: Optional[str] = None
    currency: str = Field(default_factory=lambda: settings.default_currency, min_length=1)


class CreateExpenseInput(BaseModel):
    description: str = Field(min_length=3, max_length=100)
    amount: Decimal = Field(gt=0, le=Decimal("999999.99"))
    paid_by_member_id: str
    expense_date: date = Field(default_factory=date.today)
    category: ExpenseCategory = ExpenseCategory.OTHER
    split_type: SplitType = SplitType.EQUAL
    notes: Optional[str] = None
    # Empty means "everyone in the group".
    participants: list[str] = Field(default_factory=list)
    weights: Optional[dict[str, Decimal]] = None


class CreateSettlementInput(BaseModel):
    from_member_id: str
    to_member_id: str
    amount: Decimal = Field(gt=0)
    settlement_date: date = Field(default_factory=date.today)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def _distinct_parties(self) -> CreateSettlementInput:
        if self.from_member_id == self.to_member_id:
            raise ValueError("From member and to member must be different")
        return self
