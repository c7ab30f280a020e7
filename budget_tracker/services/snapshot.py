"""
Whole-application snapshots.

``export_snapshot`` dumps every stored entity into one document and
``import_snapshot`` throws the current state away and loads a document in
its place. Imports are not merged with, or checked against, existing rows;
the document only has to parse.
"""

from datetime import datetime

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from .. import models, schemas
from ..logs import get_logger

log = get_logger(__name__)

# children before parents
_TABLES = (
    models.ExpenseSplit,
    models.GroupExpense,
    models.Settlement,
    models.Member,
    models.Group,
    models.Transaction,
    models.Budget,
)


def export_snapshot(db: Session) -> schemas.Snapshot:
    groups = db.scalars(select(models.Group).options(selectinload(models.Group.members)).order_by(models.Group.id)).all()
    expenses = db.scalars(
        select(models.GroupExpense).options(selectinload(models.GroupExpense.splits)).order_by(models.GroupExpense.id)
    ).all()
    snap = schemas.Snapshot(
        exported_at=datetime.utcnow(),
        groups=[
            schemas.SnapshotGroup(
                id=g.id, name=g.name, description=g.description or "",
                members=[schemas.SnapshotMember(id=m.id, name=m.name, email=m.email or "") for m in g.members],
            )
            for g in groups
        ],
        expenses=[
            schemas.SnapshotExpense(
                id=e.id, group_id=e.group_id, payer_id=e.payer_id, amount=e.amount, category=e.category or "",
                description=e.description or "", split_type=e.split_type, date=e.date,
                splits=[schemas.SnapshotSplit(member_id=s.member_id, amount=s.amount, paid=s.paid) for s in e.splits],
            )
            for e in expenses
        ],
        settlements=[
            schemas.SnapshotSettlement(
                id=s.id, group_id=s.group_id, from_member_id=s.from_member_id, to_member_id=s.to_member_id,
                amount=s.amount, date=s.date, memo=s.memo,
            )
            for s in db.scalars(select(models.Settlement).order_by(models.Settlement.id)).all()
        ],
        transactions=[schemas.TransactionOut.model_validate(t)
                      for t in db.scalars(select(models.Transaction).order_by(models.Transaction.id)).all()],
        budgets=[schemas.BudgetOut.model_validate(b) for b in db.scalars(select(models.Budget).order_by(models.Budget.id)).all()],
    )
    log.info("snapshot_exported", groups=len(snap.groups), expenses=len(snap.expenses),
             transactions=len(snap.transactions))
    return snap


def import_snapshot(db: Session, snap: schemas.Snapshot) -> None:
    for table in _TABLES:
        db.execute(delete(table))
    db.expunge_all()

    for g in snap.groups:
        group = models.Group(id=g.id, name=g.name, description=g.description)
        group.members = [models.Member(id=m.id, name=m.name, email=m.email) for m in g.members]
        db.add(group)
    db.flush()
    for e in snap.expenses:
        exp = models.GroupExpense(id=e.id, group_id=e.group_id, payer_id=e.payer_id, amount=e.amount,
                                  category=e.category, description=e.description, split_type=e.split_type, date=e.date)
        exp.splits = [models.ExpenseSplit(member_id=s.member_id, amount=s.amount, paid=s.paid) for s in e.splits]
        db.add(exp)
    for s in snap.settlements:
        db.add(models.Settlement(id=s.id, group_id=s.group_id, from_member_id=s.from_member_id,
                                 to_member_id=s.to_member_id, amount=s.amount, date=s.date, memo=s.memo))
    for t in snap.transactions:
        db.add(models.Transaction(id=t.id, amount=t.amount, type=t.type, category=t.category,
                                  description=t.description, date=t.date))
    for b in snap.budgets:
        db.add(models.Budget(id=b.id, category=b.category, month=b.month, limit=b.limit))
    db.commit()
    log.info("snapshot_imported", groups=len(snap.groups), expenses=len(snap.expenses),
             settlements=len(snap.settlements), transactions=len(snap.transactions), budgets=len(snap.budgets))
