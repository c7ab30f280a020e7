"""Turns a group expense into per-member splits."""

from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict

from ..config import get_settings
from ..errors import InvalidPayerError, SplitMismatchError, UnknownMemberError
from ..logs import get_logger
from ..records import CENT, MemberRecord, SplitRecord, money

log = get_logger(__name__)


class EqualSplit(BaseModel):
    model_config = ConfigDict(frozen=True)


class CustomSplit(BaseModel):
    model_config = ConfigDict(frozen=True)

    amounts: Dict[int, Decimal]


SplitPolicy = Union[EqualSplit, CustomSplit]


def _member_ids(members: Sequence[Union[MemberRecord, int]]) -> List[int]:
    return [m if isinstance(m, int) else m.id for m in members]


def split_equal(total: Decimal, member_ids: Sequence[int]) -> Dict[int, Decimal]:
    """Share ``total`` evenly in cents; leftover cents go to the first members in order."""
    cents = int(money(total) / CENT)
    per, extra = divmod(cents, len(member_ids))
    return {uid: (per + (1 if i < extra else 0)) * CENT for i, uid in enumerate(member_ids)}


def split_custom(total: Decimal, member_ids: Sequence[int], amounts: Dict[int, Decimal],
                 tolerance: Optional[Decimal] = None) -> Dict[int, Decimal]:
    if tolerance is None:
        tolerance = get_settings().split_tolerance
    known = set(member_ids)
    for uid in amounts:
        if uid not in known:
            raise UnknownMemberError(uid)
    shares = {uid: money(amounts.get(uid, 0)) for uid in member_ids}
    negative = [uid for uid, share in shares.items() if share < 0]
    if negative:
        raise SplitMismatchError(f"Split amount for member {negative[0]} cannot be negative.")

    s = sum(shares.values(), Decimal("0"))
    if abs(s - total) > tolerance:
        raise SplitMismatchError(f"Split amounts sum ({s}) must equal total ({total}).")

    residue = total - s
    if residue:
        # ties resolve to the first member in list order
        largest = max(member_ids, key=lambda uid: shares[uid])
        shares[largest] += residue
    return shares


def allocate(total_amount, members: Sequence[Union[MemberRecord, int]], policy: SplitPolicy,
             payer_id: int) -> List[SplitRecord]:
    """
    Turn an expense total into one split per group member.

    Raises ``InvalidPayerError`` when the payer is outside the group,
    ``SplitMismatchError`` when custom amounts don't add up to the total and
    ``UnknownMemberError`` when custom amounts name a non-member. Nothing is
    persisted here; the caller stores the returned splits.
    """
    member_ids = _member_ids(members)
    if not member_ids:
        raise SplitMismatchError("Cannot split an expense between zero members.")
    if payer_id not in member_ids:
        log.warning("ledger_rejected", reason="invalid_payer", payer_id=payer_id)
        raise InvalidPayerError(f"Payer {payer_id} is not a member of the group.")
    total = money(total_amount)
    if total <= 0:
        raise SplitMismatchError(f"Expense amount must be positive, got {total}.")

    if isinstance(policy, EqualSplit):
        shares = split_equal(total, member_ids)
    elif isinstance(policy, CustomSplit):
        try:
            shares = split_custom(total, member_ids, policy.amounts)
        except (SplitMismatchError, UnknownMemberError) as exc:
            log.warning("ledger_rejected", reason=type(exc).__name__, detail=exc.message)
            raise
    else:
        raise TypeError(f"Unsupported split policy: {policy!r}")

    return [SplitRecord(member_id=uid, amount=shares[uid], paid=(uid == payer_id)) for uid in member_ids]
