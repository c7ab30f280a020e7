from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session
from ..database import get_db
from .. import models, schemas
from ..services.budgets import budget_status, create_budget, update_budget

router = APIRouter()

def get_budget(db: Session, budget_id: int) -> models.Budget:
    b = db.get(models.Budget, budget_id)
    if not b:
        raise HTTPException(status_code=404, detail="Budget not found")
    return b

def _budgets(db: Session, month: Optional[str]):
    q = select(models.Budget).order_by(models.Budget.month, models.Budget.category)
    if month:
        q = q.filter_by(month=month)
    return db.scalars(q).all()

@router.get("", response_model=list[schemas.BudgetOut])
def list_budgets(month: Optional[str] = Query(default=None, pattern=schemas.MONTH_PATTERN),
                 db: Session = Depends(get_db)):
    return _budgets(db, month)

@router.get("/status", response_model=list[schemas.BudgetStatus])
def list_budget_status(month: Optional[str] = Query(default=None, pattern=schemas.MONTH_PATTERN),
                       db: Session = Depends(get_db)):
    transactions = db.scalars(select(models.Transaction)).all()
    return [budget_status(b, transactions) for b in _budgets(db, month)]

@router.post("", response_model=schemas.BudgetOut)
def add_budget(data: schemas.BudgetIn, db: Session = Depends(get_db)):
    return create_budget(db, data)

@router.put("/{budget_id}", response_model=schemas.BudgetOut)
def edit_budget(budget_id: int, data: schemas.BudgetIn, db: Session = Depends(get_db)):
    return update_budget(db, get_budget(db, budget_id), data)

@router.delete("/{budget_id}")
def delete_budget(budget_id: int, db: Session = Depends(get_db)):
    db.delete(get_budget(db, budget_id))
    db.commit()
    return {"message": "Budget deleted"}
