"""Net balances for a group, folded from its expenses and settlements."""

from decimal import Decimal
from typing import Dict, Iterable, Sequence

from ..errors import InvalidPayerError, SplitMismatchError, UnknownMemberError
from ..logs import get_logger
from ..records import ExpenseRecord, MemberRecord, SettlementRecord

log = get_logger(__name__)


def check_expense(expense: ExpenseRecord, known: set) -> None:
    """Every split names a member, exactly one split (the payer's) is paid and the splits add up to the amount."""
    for s in expense.splits:
        if s.member_id not in known:
            log.warning("ledger_rejected", reason="unknown_member", member_id=s.member_id, expense_id=expense.id)
            raise UnknownMemberError(s.member_id, expense.group_id)
    paid = [s.member_id for s in expense.splits if s.paid]
    if paid != [expense.payer_id]:
        log.warning("ledger_rejected", reason="payer_mismatch", expense_id=expense.id, paid=paid)
        raise InvalidPayerError(
            f"Expense {expense.id} must have exactly one paid split for payer {expense.payer_id}, got {paid}."
        )
    total = sum((s.amount for s in expense.splits), Decimal("0"))
    if total != expense.amount:
        log.warning("ledger_rejected", reason="split_mismatch", expense_id=expense.id, splits_total=str(total))
        raise SplitMismatchError(f"Splits of expense {expense.id} sum to {total}, not {expense.amount}.")


def compute_balances(members: Sequence[MemberRecord], expenses: Iterable[ExpenseRecord],
                     settlements: Iterable[SettlementRecord]) -> Dict[int, Decimal]:
    """
    Net balance per member: positive is owed to the member, negative is owed by them.

    The payer of an expense is credited with the part of the bill the others
    cover and every other participant is debited their share. A settlement
    moves value from the payee's balance to the payer's. Both steps net to
    zero, so a well-formed group always sums to exactly zero.

    Any reference to a non-member aborts the whole computation.
    """
    balances: Dict[int, Decimal] = {m.id: Decimal("0.00") for m in members}
    known = set(balances)

    for e in expenses:
        check_expense(e, known)
        for s in e.splits:
            if s.paid:
                balances[s.member_id] += e.amount - s.amount
            else:
                balances[s.member_id] -= s.amount

    for st in settlements:
        for uid in (st.from_member_id, st.to_member_id):
            if uid not in known:
                log.warning("ledger_rejected", reason="unknown_member", member_id=uid, settlement_id=st.id)
                raise UnknownMemberError(uid, st.group_id)
        balances[st.from_member_id] += st.amount
        balances[st.to_member_id] -= st.amount

    return balances
