from decimal import Decimal

import pytest
from budget_tracker.errors import InvalidPayerError, SplitMismatchError, UnknownMemberError
from budget_tracker.records import MemberRecord
from budget_tracker.services.splits import CustomSplit, EqualSplit, allocate, split_equal

A, B, C = 1, 2, 3
MEMBERS = [MemberRecord(id=A, name="Asha"), MemberRecord(id=B, name="Ben"), MemberRecord(id=C, name="Chen")]

def as_map(splits):
    return {s.member_id: (s.amount, s.paid) for s in splits}

def test_equal_split_two_members():
    splits = allocate(Decimal("50"), MEMBERS[:2], EqualSplit(), payer_id=A)
    assert as_map(splits) == {A: (Decimal("25.00"), True), B: (Decimal("25.00"), False)}

def test_equal_split_hands_leftover_cents_to_first_members():
    splits = allocate(Decimal("100.00"), MEMBERS, EqualSplit(), payer_id=A)
    assert [s.amount for s in splits] == [Decimal("33.34"), Decimal("33.33"), Decimal("33.33")]
    assert sum(s.amount for s in splits) == Decimal("100.00")

def test_equal_split_sums_exactly_for_awkward_totals():
    for total in ("0.01", "0.02", "10.00", "99.99", "1234.57"):
        shares = split_equal(Decimal(total), [A, B, C])
        assert sum(shares.values()) == Decimal(total)

def test_only_payer_is_marked_paid():
    splits = allocate(Decimal("90"), MEMBERS, EqualSplit(), payer_id=B)
    assert [s.member_id for s in splits if s.paid] == [B]

def test_members_may_be_given_as_ids():
    splits = allocate(Decimal("90"), [A, B, C], EqualSplit(), payer_id=C)
    assert set(s.amount for s in splits) == {Decimal("30.00")}

def test_custom_split():
    splits = allocate(Decimal("100"), MEMBERS, CustomSplit(amounts={A: Decimal("70"), B: Decimal("30")}), payer_id=A)
    assert as_map(splits) == {A: (Decimal("70.00"), True), B: (Decimal("30.00"), False), C: (Decimal("0.00"), False)}

def test_custom_split_mismatch():
    with pytest.raises(SplitMismatchError):
        allocate(Decimal("100"), MEMBERS, CustomSplit(amounts={A: Decimal("40"), B: Decimal("40")}), payer_id=A)

def test_custom_split_within_tolerance_is_made_exact():
    amounts = {A: Decimal("33.33"), B: Decimal("33.33"), C: Decimal("33.33")}
    splits = allocate(Decimal("100"), MEMBERS, CustomSplit(amounts=amounts), payer_id=B)
    assert sum(s.amount for s in splits) == Decimal("100.00")
    assert as_map(splits)[A] == (Decimal("33.34"), False)

def test_custom_split_rejects_negative_share():
    amounts = {A: Decimal("110"), B: Decimal("-10")}
    with pytest.raises(SplitMismatchError):
        allocate(Decimal("100"), MEMBERS, CustomSplit(amounts=amounts), payer_id=A)

def test_custom_split_rejects_non_member():
    amounts = {A: Decimal("50"), 42: Decimal("50")}
    with pytest.raises(UnknownMemberError) as exc:
        allocate(Decimal("100"), MEMBERS, CustomSplit(amounts=amounts), payer_id=A)
    assert exc.value.member_id == 42

def test_payer_must_be_member():
    with pytest.raises(InvalidPayerError):
        allocate(Decimal("100"), MEMBERS, EqualSplit(), payer_id=99)

def test_amount_must_be_positive():
    with pytest.raises(SplitMismatchError):
        allocate(Decimal("0"), MEMBERS, EqualSplit(), payer_id=A)

def test_empty_group():
    with pytest.raises(SplitMismatchError):
        allocate(Decimal("10"), [], EqualSplit(), payer_id=A)
