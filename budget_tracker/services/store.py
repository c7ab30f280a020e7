"""Reads group history out of the database as validated ledger records."""

from typing import List

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from .. import models
from ..records import ExpenseRecord, GroupRecord, MemberRecord, SettlementRecord


def get_group(db: Session, group_id: int) -> models.Group:
    g = db.get(models.Group, group_id)
    if not g:
        raise HTTPException(status_code=404, detail="Group not found")
    return g


def list_members(db: Session, group_id: int) -> List[MemberRecord]:
    rows = db.scalars(select(models.Member).filter_by(group_id=group_id).order_by(models.Member.id)).all()
    return [MemberRecord.model_validate(r) for r in rows]


def list_expenses(db: Session, group_id: int) -> List[ExpenseRecord]:
    q = (
        select(models.GroupExpense)
        .filter_by(group_id=group_id)
        .options(selectinload(models.GroupExpense.splits))
        .order_by(models.GroupExpense.created_at, models.GroupExpense.id)
    )
    return [ExpenseRecord.model_validate(r) for r in db.scalars(q).all()]


def list_settlements(db: Session, group_id: int) -> List[SettlementRecord]:
    q = (
        select(models.Settlement)
        .filter_by(group_id=group_id)
        .order_by(models.Settlement.created_at, models.Settlement.id)
    )
    return [SettlementRecord.model_validate(r) for r in db.scalars(q).all()]


def load_group(db: Session, group_id: int) -> GroupRecord:
    g = get_group(db, group_id)
    return GroupRecord(id=g.id, name=g.name, description=g.description or "", members=list_members(db, group_id))
