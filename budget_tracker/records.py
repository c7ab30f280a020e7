"""
Immutable ledger records.

These are the shapes the ledger core works on. They are validated once,
where rows leave the store (``services/store.py``) or where tests build
fixtures, so the ledger functions can trust them.

Money is ``Decimal`` quantized to cents.
"""

from datetime import date as Date, datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CENT = Decimal("0.01")


def money(value) -> Decimal:
    """Coerce ``value`` to a Decimal rounded half-up to whole cents."""
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True)


class MemberRecord(_Record):
    id: int
    name: str
    email: str = ""


class SplitRecord(_Record):
    member_id: int
    amount: Decimal = Field(ge=0)
    paid: bool = False

    @field_validator("amount")
    @classmethod
    def _cents(cls, v: Decimal) -> Decimal:
        return money(v)


class ExpenseRecord(_Record):
    id: Optional[int] = None
    group_id: Optional[int] = None
    payer_id: int
    amount: Decimal = Field(gt=0)
    category: str = ""
    description: str = ""
    date: Date
    splits: Tuple[SplitRecord, ...] = ()
    created_at: Optional[datetime] = None

    @field_validator("amount")
    @classmethod
    def _cents(cls, v: Decimal) -> Decimal:
        return money(v)


class SettlementRecord(_Record):
    id: Optional[int] = None
    group_id: Optional[int] = None
    from_member_id: int
    to_member_id: int
    amount: Decimal = Field(gt=0)
    date: Date
    memo: Optional[str] = None
    created_at: Optional[datetime] = None

    @field_validator("amount")
    @classmethod
    def _cents(cls, v: Decimal) -> Decimal:
        return money(v)

    @model_validator(mode="after")
    def _distinct_parties(self):
        if self.from_member_id == self.to_member_id:
            raise ValueError("a settlement needs two different members")
        return self


class GroupRecord(_Record):
    id: int
    name: str
    description: str = ""
    members: Tuple[MemberRecord, ...] = ()
