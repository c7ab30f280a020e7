from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from ..config import get_settings
from ..database import get_db
from .. import schemas
from ..services.balances import compute_balances
from ..services.ledger_view import group_totals, project, suggest_settlements, top_activity
from ..services.store import list_expenses, list_members, list_settlements, load_group

router = APIRouter()

@router.get("/ledger", response_model=schemas.LedgerOut)
def get_ledger(group_id: int, db: Session = Depends(get_db)):
    group = load_group(db, group_id)
    expenses = list_expenses(db, group_id)
    balances = compute_balances(group.members, expenses, list_settlements(db, group_id))
    ledger = project(group, balances)
    return schemas.LedgerOut(**ledger.model_dump(), totals=group_totals(expenses))

@router.get("/balances", response_model=list[schemas.MemberBalance])
def get_balances(group_id: int, db: Session = Depends(get_db)):
    group = load_group(db, group_id)
    balances = compute_balances(group.members, list_expenses(db, group_id), list_settlements(db, group_id))
    return project(group, balances).members

@router.get("/ledger/suggestions", response_model=list[schemas.SuggestedPayment])
def get_suggestions(group_id: int, db: Session = Depends(get_db)):
    load_group(db, group_id)
    balances = compute_balances(list_members(db, group_id), list_expenses(db, group_id), list_settlements(db, group_id))
    return suggest_settlements(balances)

@router.get("/activity", response_model=list[schemas.ActivityItem])
def get_activity(group_id: int, limit: Optional[int] = Query(default=None, ge=0, le=500),
                 db: Session = Depends(get_db)):
    load_group(db, group_id)
    if limit is None:
        limit = get_settings().activity_limit
    return top_activity(list_expenses(db, group_id), list_settlements(db, group_id), limit)
