from collections import defaultdict
from decimal import Decimal
from typing import Iterable, List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from .. import models, schemas
from ..errors import DuplicateBudgetError
from ..logs import get_logger

log = get_logger(__name__)

ZERO = Decimal("0.00")


def month_of(d) -> str:
    return d.strftime("%Y-%m")


def shift_month(month: str, delta: int) -> str:
    year, mon = (int(p) for p in month.split("-"))
    index = year * 12 + (mon - 1) + delta
    return f"{index // 12:04d}-{index % 12 + 1:02d}"


def monthly_transactions(transactions: Iterable[models.Transaction], month: str) -> List[models.Transaction]:
    return [t for t in transactions if month_of(t.date) == month]


def calculate_budget_spent(transactions: Iterable[models.Transaction], category: str, month: str) -> Decimal:
    """Personal expenses booked against ``category`` in ``month``; group expenses are never included."""
    return sum(
        (t.amount for t in monthly_transactions(transactions, month)
         if t.type == "expense" and t.category == category),
        ZERO,
    )


def classify_budget(percentage: float) -> str:
    if percentage > 100:
        return "over"
    if percentage > 80:
        return "warning"
    return "good"


def budget_status(budget: models.Budget, transactions: Iterable[models.Transaction]) -> schemas.BudgetStatus:
    spent = calculate_budget_spent(transactions, budget.category, budget.month)
    pct = float(spent / budget.limit * 100) if budget.limit else 0.0
    return schemas.BudgetStatus(
        id=budget.id, category=budget.category, month=budget.month, limit=budget.limit,
        spent=spent, remaining=budget.limit - spent, percentage=round(pct, 2),
        status=classify_budget(pct),
    )


def monthly_summary(transactions: Iterable[models.Transaction], month: str) -> schemas.MonthlySummary:
    income = expenses = ZERO
    by_category = defaultdict(lambda: ZERO)
    for t in monthly_transactions(transactions, month):
        if t.type == "income":
            income += t.amount
        else:
            expenses += t.amount
            by_category[t.category] += t.amount
    breakdown = [schemas.CategoryTotal(category=c, amount=a)
                 for c, a in sorted(by_category.items(), key=lambda kv: kv[1], reverse=True)]
    return schemas.MonthlySummary(month=month, income=income, expenses=expenses,
                                  savings=income - expenses, by_category=breakdown)


def monthly_trends(transactions: List[models.Transaction], end_month: str, months: int = 6) -> List[schemas.MonthlySummary]:
    """Summaries for ``months`` consecutive months ending at ``end_month``, oldest first."""
    return [monthly_summary(transactions, shift_month(end_month, -offset)) for offset in range(months - 1, -1, -1)]


def monthly_insights(transactions: List[models.Transaction], budgets: Iterable[models.Budget],
                     month: str) -> schemas.MonthlyInsights:
    """
    Headline figures for ``month``.

    ``expense_change`` is the percent change in expenses against the
    previous month, 0 when the previous month had no expenses.
    ``savings_rate`` is the share of income left after expenses, 0 without
    income. Only budgets for ``month`` are counted.
    """
    current = monthly_summary(transactions, month)
    previous = monthly_summary(transactions, shift_month(month, -1))
    change = float((current.expenses - previous.expenses) / previous.expenses * 100) if previous.expenses > 0 else 0.0
    rate = float(current.savings / current.income * 100) if current.income > 0 else 0.0
    statuses = [budget_status(b, transactions).status for b in budgets if b.month == month]
    return schemas.MonthlyInsights(
        month=month, previous_month=previous.month,
        expense_change=round(change, 1), savings_rate=round(rate, 1),
        over_budget=statuses.count("over"), warning_budget=statuses.count("warning"),
        top_categories=current.by_category[:3],
    )


def ensure_unique_budget(db: Session, category: str, month: str, exclude_id: Optional[int] = None):
    q = select(models.Budget).filter_by(category=category, month=month)
    if exclude_id is not None:
        q = q.where(models.Budget.id != exclude_id)
    if db.scalars(q).first():
        log.warning("budget_rejected", category=category, month=month)
        raise DuplicateBudgetError(category, month)


def create_budget(db: Session, data: schemas.BudgetIn) -> models.Budget:
    ensure_unique_budget(db, data.category, data.month)
    b = models.Budget(category=data.category, month=data.month, limit=data.limit)
    db.add(b)
    db.commit()
    db.refresh(b)
    log.info("budget_created", budget_id=b.id, category=b.category, month=b.month)
    return b


def update_budget(db: Session, budget: models.Budget, data: schemas.BudgetIn) -> models.Budget:
    ensure_unique_budget(db, data.category, data.month, exclude_id=budget.id)
    budget.category = data.category
    budget.month = data.month
    budget.limit = data.limit
    db.commit()
    db.refresh(budget)
    return budget
