from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.orm import Session
from ..database import get_db
from .. import models, schemas
from ..services.budgets import monthly_transactions

router = APIRouter()

def get_transaction(db: Session, transaction_id: int) -> models.Transaction:
    t = db.get(models.Transaction, transaction_id)
    if not t:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return t

@router.get("", response_model=list[schemas.TransactionOut])
def list_transactions(month: Optional[str] = Query(default=None, pattern=schemas.MONTH_PATTERN),
                      db: Session = Depends(get_db)):
    rows = db.scalars(select(models.Transaction).order_by(models.Transaction.date.desc(), models.Transaction.id)).all()
    if month:
        rows = monthly_transactions(rows, month)
    return rows

@router.post("", response_model=schemas.TransactionOut)
def create_transaction(data: schemas.TransactionIn, db: Session = Depends(get_db)):
    t = models.Transaction(amount=data.amount, type=data.type, category=data.category,
                           description=data.description or "", date=data.date)
    db.add(t)
    db.commit(); db.refresh(t)
    return t

@router.put("/{transaction_id}", response_model=schemas.TransactionOut)
def update_transaction(transaction_id: int, data: schemas.TransactionIn, db: Session = Depends(get_db)):
    t = get_transaction(db, transaction_id)
    t.amount = data.amount
    t.type = data.type
    t.category = data.category
    t.description = data.description or ""
    t.date = data.date
    db.commit(); db.refresh(t)
    return t

@router.delete("/{transaction_id}")
def delete_transaction(transaction_id: int, db: Session = Depends(get_db)):
    db.delete(get_transaction(db, transaction_id))
    db.commit()
    return {"message": "Transaction deleted"}
