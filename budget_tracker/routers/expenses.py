from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ..database import get_db
from .. import models, schemas
from ..logs import get_logger
from ..services.splits import CustomSplit, EqualSplit, SplitPolicy, allocate
from ..services.store import get_group

router = APIRouter()
log = get_logger(__name__)

def add_expense(db: Session, group: models.Group, data: schemas.ExpenseBase, split_type: str,
                policy: SplitPolicy) -> models.GroupExpense:
    # splits are validated before anything touches the session
    splits = allocate(data.amount, [m.id for m in group.members], policy, data.payer_id)
    exp = models.GroupExpense(group_id=group.id, payer_id=data.payer_id, amount=data.amount, category=data.category,
                              description=data.description or "", split_type=split_type, date=data.date)
    for s in splits:
        exp.splits.append(models.ExpenseSplit(member_id=s.member_id, amount=s.amount, paid=s.paid))
    db.add(exp)
    db.commit(); db.refresh(exp)
    log.info("expense_created", group_id=group.id, expense_id=exp.id, split_type=split_type, amount=str(exp.amount))
    return exp

@router.post("/equal", response_model=schemas.ExpenseOut)
def add_equal(group_id: int, data: schemas.ExpenseEqualIn, db: Session = Depends(get_db)):
    group = get_group(db, group_id)
    return add_expense(db, group, data, "equal", EqualSplit())

@router.post("/custom", response_model=schemas.ExpenseOut)
def add_custom(group_id: int, data: schemas.ExpenseCustomIn, db: Session = Depends(get_db)):
    group = get_group(db, group_id)
    return add_expense(db, group, data, "custom", CustomSplit(amounts=data.amounts))

@router.get("", response_model=list[schemas.ExpenseOut])
def get_expenses(group_id: int, db: Session = Depends(get_db)):
    return get_group(db, group_id).expenses

@router.delete("/{expense_id}")
def delete_expense(group_id: int, expense_id: int, db: Session = Depends(get_db)):
    exp = db.get(models.GroupExpense, expense_id)
    if not exp or exp.group_id != group_id:
        raise HTTPException(status_code=404, detail="Expense not found")
    db.delete(exp)
    db.commit()
    log.info("expense_deleted", group_id=group_id, expense_id=expense_id)
    return {"message": "Expense deleted"}
