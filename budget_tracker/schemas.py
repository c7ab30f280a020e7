from pydantic import BaseModel, Field, ConfigDict, EmailStr
from typing import List, Dict, Literal, Optional
from datetime import date, datetime
from decimal import Decimal

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"

class MemberCreate(BaseModel):
    name: str = Field(min_length=1, max_length=120)
    email: Optional[EmailStr] = None

class MemberOut(BaseModel):
    id: int
    group_id: int
    name: str
    email: str
    model_config = ConfigDict(from_attributes=True)

class GroupCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: Optional[str] = ""
    members: List[MemberCreate] = []

class GroupUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = None

class GroupOut(BaseModel):
    id: int
    name: str
    description: str
    members: List[MemberOut]
    model_config = ConfigDict(from_attributes=True)

class ExpenseBase(BaseModel):
    payer_id: int
    amount: Decimal = Field(gt=0, decimal_places=2)
    category: str = ""
    description: Optional[str] = ""
    date: date

class ExpenseEqualIn(ExpenseBase):
    pass

class ExpenseCustomIn(ExpenseBase):
    amounts: Dict[int, Decimal]

class SplitOut(BaseModel):
    member_id: int
    amount: Decimal
    paid: bool
    model_config = ConfigDict(from_attributes=True)

class ExpenseOut(BaseModel):
    id: int
    group_id: int
    payer_id: int
    amount: Decimal
    category: str
    description: str
    split_type: str
    date: date
    created_at: datetime
    splits: List[SplitOut]
    model_config = ConfigDict(from_attributes=True)

class SettlementIn(BaseModel):
    from_member_id: int
    to_member_id: int
    amount: Decimal = Field(gt=0, decimal_places=2)
    date: date
    memo: Optional[str] = None

class SettlementOut(BaseModel):
    id: int
    group_id: int
    from_member_id: int
    to_member_id: int
    amount: Decimal
    date: date
    memo: Optional[str]
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)

class MemberBalance(BaseModel):
    id: int
    name: str
    email: str
    balance: Decimal
    status: str

class GroupLedger(BaseModel):
    id: int
    name: str
    description: str
    members: List[MemberBalance]

class GroupTotals(BaseModel):
    total_spent: Decimal
    expense_count: int

class ActivityItem(BaseModel):
    kind: Literal["expense", "settlement"]
    id: Optional[int]
    date: date
    description: str
    amount: Decimal
    category: Optional[str] = None
    payer_id: Optional[int] = None
    participants: Optional[int] = None
    from_member_id: Optional[int] = None
    to_member_id: Optional[int] = None

class SuggestedPayment(BaseModel):
    from_member_id: int
    to_member_id: int
    amount: Decimal

class LedgerOut(GroupLedger):
    totals: GroupTotals

class TransactionIn(BaseModel):
    amount: Decimal = Field(gt=0, decimal_places=2)
    type: Literal["income", "expense"]
    category: str = Field(min_length=1)
    description: Optional[str] = ""
    date: date

class TransactionOut(BaseModel):
    id: int
    amount: Decimal
    type: str
    category: str
    description: str
    date: date
    model_config = ConfigDict(from_attributes=True)

class BudgetIn(BaseModel):
    category: str = Field(min_length=1)
    month: str = Field(pattern=MONTH_PATTERN, description="Calendar month as YYYY-MM")
    limit: Decimal = Field(gt=0, decimal_places=2)

class BudgetOut(BaseModel):
    id: int
    category: str
    month: str
    limit: Decimal
    model_config = ConfigDict(from_attributes=True)

class BudgetStatus(BudgetOut):
    spent: Decimal
    remaining: Decimal
    percentage: float
    status: Literal["good", "warning", "over"]

class CategoryTotal(BaseModel):
    category: str
    amount: Decimal

class MonthlySummary(BaseModel):
    month: str
    income: Decimal
    expenses: Decimal
    savings: Decimal
    by_category: List[CategoryTotal]

class MonthlyInsights(BaseModel):
    month: str
    previous_month: str
    expense_change: float
    savings_rate: float
    over_budget: int
    warning_budget: int
    top_categories: List[CategoryTotal]

class SnapshotSplit(BaseModel):
    member_id: int
    amount: Decimal
    paid: bool

class SnapshotExpense(BaseModel):
    id: int
    group_id: int
    payer_id: int
    amount: Decimal
    category: str = ""
    description: str = ""
    split_type: str = "custom"
    date: date
    splits: List[SnapshotSplit] = []

class SnapshotSettlement(BaseModel):
    id: int
    group_id: int
    from_member_id: int
    to_member_id: int
    amount: Decimal
    date: date
    memo: Optional[str] = None

class SnapshotMember(BaseModel):
    id: int
    name: str
    email: str = ""

class SnapshotGroup(BaseModel):
    id: int
    name: str
    description: str = ""
    members: List[SnapshotMember] = []

class Snapshot(BaseModel):
    version: int = 1
    exported_at: Optional[datetime] = None
    groups: List[SnapshotGroup] = []
    expenses: List[SnapshotExpense] = []
    settlements: List[SnapshotSettlement] = []
    transactions: List[TransactionOut] = []
    budgets: List[BudgetOut] = []
