from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from splitledger.config import settings
from splitledger.errors import InvalidSplitInput, MemberAlreadyInGroup, UnknownMemberError
from splitledger.models import ExpenseCategory, GroupMember, Member, SplitType
from splitledger.schemas import CreateExpenseInput, CreateGroupInput, CreateSettlementInput
from splitledger.services.expenses import build_expense, soft_delete_expense
from splitledger.services.ledger import compute_balances
from splitledger.services.members import add_group_member, build_group, remove_group_member
from splitledger.services.settlements import build_settlement

D = Decimal

ROSTER = [Member(id="ann", display_name="Ann"), Member(id="ben", display_name="Ben"), Member(id="cat")]


def test_expense_defaults_to_everyone_and_equal_split():
    data = CreateExpenseInput(description="Groceries", amount=D("90"), paid_by_member_id="ann")
    expense, splits = build_expense(data, group_id="g1", members=ROSTER, expense_id="e1")

    assert expense.id == "e1"
    assert expense.group_id == "g1"
    assert expense.split_type is SplitType.EQUAL
    assert expense.category is ExpenseCategory.OTHER
    assert expense.expense_date == date.today()
    assert [(s.expense_id, s.member_id, s.amount) for s in splits] == [
        ("e1", "ann", D("30.00")),
        ("e1", "ben", D("30.00")),
        ("e1", "cat", D("30.00")),
    ]


def test_expense_with_no_participants_ticked_splits_among_everyone():
    data = CreateExpenseInput(description="Rent", amount="300", paid_by_member_id="ben", participants=[])
    _, splits = build_expense(data, group_id="g1", members=ROSTER)
    assert [s.member_id for s in splits] == ["ann", "ben", "cat"]
    assert sum(s.amount for s in splits) == D("300")


def test_expense_with_shares():
    data = CreateExpenseInput(
        description="Cabin",
        amount="300",
        paid_by_member_id="ben",
        split_type="shares",
        participants=["ann", "ben"],
        weights={"ann": "2", "ben": "1"},
    )
    expense, splits = build_expense(data, group_id="g1", members=ROSTER)
    assert len(expense.id) == 36
    assert {s.member_id: s.amount for s in splits} == {"ann": D("200.00"), "ben": D("100.00")}


def test_expense_notes_are_trimmed():
    data = CreateExpenseInput(description="  Taxi  ", amount="12", paid_by_member_id="ann", notes="   ")
    expense, _ = build_expense(data, group_id="g1", members=ROSTER)
    assert expense.description == "Taxi"
    assert expense.notes is None


def test_expense_rejects_outsiders():
    data = CreateExpenseInput(description="Taxi", amount="12", paid_by_member_id="zed")
    with pytest.raises(UnknownMemberError) as exc:
        build_expense(data, group_id="g1", members=ROSTER)
    assert exc.value.member_id == "zed"

    data = CreateExpenseInput(description="Taxi", amount="12", paid_by_member_id="ann", participants=["ann", "zed"])
    with pytest.raises(UnknownMemberError):
        build_expense(data, group_id="g1", members=ROSTER)


def test_weighted_expense_without_weights_fails():
    data = CreateExpenseInput(description="Taxi", amount="12", paid_by_member_id="ann", split_type="unequal")
    with pytest.raises(InvalidSplitInput):
        build_expense(data, group_id="g1", members=ROSTER)


@pytest.mark.parametrize(
    "fields",
    [
        {"description": "ab", "amount": "10"},
        {"description": "Taxi", "amount": "0"},
        {"description": "Taxi", "amount": "-1"},
        {"description": "Taxi", "amount": "1000000"},
        {"description": "Taxi", "amount": "10", "split_type": "thirds"},
    ],
)
def test_create_expense_input_validation(fields):
    with pytest.raises(ValidationError):
        CreateExpenseInput(paid_by_member_id="ann", **fields)


def test_soft_delete_returns_a_copy():
    data = CreateExpenseInput(description="Dinner", amount="60", paid_by_member_id="ann", participants=["ann", "ben"])
    expense, splits = build_expense(data, group_id="g1", members=ROSTER)

    deleted = soft_delete_expense(expense)
    assert deleted.is_deleted is True
    assert expense.is_deleted is False
    assert deleted.id == expense.id

    assert [b.balance for b in compute_balances([expense], splits, ROSTER)] == [D("30.00"), D("-30.00"), D("0")]
    assert [b.balance for b in compute_balances([deleted], splits, ROSTER)] == [D("0"), D("0"), D("0")]


def test_build_settlement():
    data = CreateSettlementInput(from_member_id="ben", to_member_id="ann", amount="30", notes=" cash ")
    s = build_settlement(data, group_id="g1", members=ROSTER, settlement_id="s1")
    assert (s.id, s.group_id, s.from_member_id, s.to_member_id, s.amount) == ("s1", "g1", "ben", "ann", D("30"))
    assert s.notes == "cash"


def test_settlement_parties_must_differ():
    with pytest.raises(ValidationError):
        CreateSettlementInput(from_member_id="ann", to_member_id="ann", amount="5")


def test_settlement_amount_must_be_positive():
    with pytest.raises(ValidationError):
        CreateSettlementInput(from_member_id="ann", to_member_id="ben", amount="0")


def test_settlement_rejects_outsiders():
    data = CreateSettlementInput(from_member_id="ann", to_member_id="zed", amount="5")
    with pytest.raises(UnknownMemberError):
        build_settlement(data, group_id="g1", members=ROSTER)


def test_build_group_makes_the_creator_a_member():
    group, membership = build_group(CreateGroupInput(name=" Trip ", currency="eur"), created_by=ROSTER[0], group_id="g1")
    assert (group.id, group.name, group.currency, group.is_archived) == ("g1", "Trip", "EUR", False)
    assert (membership.group_id, membership.member_id) == ("g1", "ann")
    assert membership.joined_at is not None


PROFILES = [Member(id="ann", email="ann@example.com"), Member(id="dan", email="Dan@Example.com")]


def test_add_group_member_by_email():
    memberships = [GroupMember(group_id="g1", member_id="ann")]
    gm = add_group_member("g1", email=" dan@example.COM ", profiles=PROFILES, memberships=memberships)
    assert (gm.group_id, gm.member_id) == ("g1", "dan")


def test_add_group_member_unknown_email():
    with pytest.raises(UnknownMemberError):
        add_group_member("g1", email="zed@example.com", profiles=PROFILES, memberships=[])


def test_add_group_member_twice():
    memberships = [GroupMember(group_id="g1", member_id="ann")]
    with pytest.raises(MemberAlreadyInGroup):
        add_group_member("g1", email="ann@example.com", profiles=PROFILES, memberships=memberships)
    # membership elsewhere does not count
    gm = add_group_member("g2", email="ann@example.com", profiles=PROFILES, memberships=memberships)
    assert gm.group_id == "g2"


def test_remove_group_member():
    memberships = [
        GroupMember(group_id="g1", member_id="ann"),
        GroupMember(group_id="g1", member_id="dan"),
        GroupMember(group_id="g2", member_id="dan"),
    ]
    left = remove_group_member("g1", "dan", memberships)
    assert [(gm.group_id, gm.member_id) for gm in left] == [("g1", "ann"), ("g2", "dan")]
    assert remove_group_member("g1", "zed", left) == left


def test_group_currency_defaults_from_settings():
    assert CreateGroupInput(name="Flat").currency == settings.default_currency


@pytest.mark.parametrize("name", ["ab", "x" * 51])
def test_group_name_length(name):
    with pytest.raises(ValidationError):
        CreateGroupInput(name=name)
