"""Read-only views of a group ledger for presentation."""

from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..config import get_settings
from ..records import ExpenseRecord, GroupRecord, SettlementRecord
from ..schemas import ActivityItem, GroupLedger, GroupTotals, MemberBalance, SuggestedPayment


def format_currency(amount: Decimal, symbol: Optional[str] = None) -> str:
    if symbol is None:
        symbol = get_settings().currency_symbol
    return f"{symbol}{amount:,.2f}"


def describe_balance(balance: Decimal, symbol: Optional[str] = None) -> str:
    if balance > 0:
        return f"is owed {format_currency(balance, symbol)}"
    if balance < 0:
        return f"owes {format_currency(-balance, symbol)}"
    return "settled up"


def project(group: GroupRecord, balances: Dict[int, Decimal]) -> GroupLedger:
    """Build a read-only copy of ``group`` with each member's balance attached."""
    members = []
    for m in group.members:
        bal = balances.get(m.id, Decimal("0.00"))
        members.append(MemberBalance(id=m.id, name=m.name, email=m.email, balance=bal, status=describe_balance(bal)))
    return GroupLedger(id=group.id, name=group.name, description=group.description, members=members)


def top_activity(expenses: Iterable[ExpenseRecord], settlements: Iterable[SettlementRecord],
                 limit: int) -> List[ActivityItem]:
    items = [
        ActivityItem(kind="expense", id=e.id, date=e.date, description=e.description, amount=e.amount,
                     category=e.category, payer_id=e.payer_id, participants=len(e.splits))
        for e in expenses
    ]
    items += [
        ActivityItem(kind="settlement", id=s.id, date=s.date, description=s.memo or "Settlement payment",
                     amount=s.amount, from_member_id=s.from_member_id, to_member_id=s.to_member_id)
        for s in settlements
    ]
    # sort is stable with reverse=True, so same-day entries keep their input order
    items.sort(key=lambda item: item.date, reverse=True)
    return items[:max(limit, 0)]


def group_totals(expenses: Sequence[ExpenseRecord]) -> GroupTotals:
    return GroupTotals(total_spent=sum((e.amount for e in expenses), Decimal("0.00")), expense_count=len(expenses))


def min_cash_flow(balances: Dict[int, Decimal]) -> List[Tuple[int, int, Decimal]]:
    """Greedy payments (debtor, creditor, amount) that zero every balance."""
    creditors = [(u, amt) for u, amt in balances.items() if amt > 0]
    debtors = [(u, -amt) for u, amt in balances.items() if amt < 0]
    creditors.sort(key=lambda x: x[1], reverse=True)
    debtors.sort(key=lambda x: x[1], reverse=True)

    i = j = 0
    transfers = []
    while i < len(debtors) and j < len(creditors):
        d_id, d_amt = debtors[i]
        c_id, c_amt = creditors[j]
        pay = min(d_amt, c_amt)
        transfers.append((d_id, c_id, pay))
        d_amt -= pay
        c_amt -= pay
        if d_amt == 0:
            i += 1
        else:
            debtors[i] = (d_id, d_amt)
        if c_amt == 0:
            j += 1
        else:
            creditors[j] = (c_id, c_amt)
    return transfers


def suggest_settlements(balances: Dict[int, Decimal]) -> List[SuggestedPayment]:
    return [SuggestedPayment(from_member_id=d, to_member_id=c, amount=a) for d, c, a in min_cash_flow(balances)]
