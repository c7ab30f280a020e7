from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ..database import get_db
from .. import models, schemas
from ..errors import SelfSettlementError, UnknownMemberError
from ..logs import get_logger
from ..services.store import get_group

router = APIRouter()
log = get_logger(__name__)

def ensure_member(group: models.Group, member_id: int):
    if member_id not in {m.id for m in group.members}:
        raise UnknownMemberError(member_id, group.id)

@router.post("", response_model=schemas.SettlementOut)
def settle(group_id: int, data: schemas.SettlementIn, db: Session = Depends(get_db)):
    group = get_group(db, group_id)
    ensure_member(group, data.from_member_id)
    ensure_member(group, data.to_member_id)
    if data.from_member_id == data.to_member_id:
        raise SelfSettlementError("Cannot settle with self.")

    s = models.Settlement(group_id=group_id, from_member_id=data.from_member_id, to_member_id=data.to_member_id,
                          amount=data.amount, date=data.date, memo=data.memo)
    db.add(s)
    db.commit(); db.refresh(s)
    log.info("settlement_recorded", group_id=group_id, settlement_id=s.id, amount=str(s.amount))
    return s

@router.get("", response_model=list[schemas.SettlementOut])
def get_settlements(group_id: int, db: Session = Depends(get_db)):
    return get_group(db, group_id).settlements

@router.delete("/{settlement_id}")
def delete_settlement(group_id: int, settlement_id: int, db: Session = Depends(get_db)):
    s = db.get(models.Settlement, settlement_id)
    if not s or s.group_id != group_id:
        raise HTTPException(status_code=404, detail="Settlement not found")
    db.delete(s)
    db.commit()
    log.info("settlement_deleted", group_id=group_id, settlement_id=settlement_id)
    return {"message": "Settlement deleted"}
