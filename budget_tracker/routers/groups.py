from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session
from ..database import get_db
from .. import models, schemas
from ..logs import get_logger
from ..services.store import get_group

router = APIRouter()
log = get_logger(__name__)

@router.post("", response_model=schemas.GroupOut)
def create_group(group: schemas.GroupCreate, db: Session = Depends(get_db)):
    g = models.Group(name=group.name, description=group.description or "")
    for m in group.members:
        g.members.append(models.Member(name=m.name, email=m.email or ""))
    db.add(g)
    db.commit()
    db.refresh(g)
    log.info("group_created", group_id=g.id, members=len(g.members))
    return g

@router.get("", response_model=list[schemas.GroupOut])
def list_groups(db: Session = Depends(get_db)):
    return db.scalars(select(models.Group).order_by(models.Group.id)).all()

@router.get("/{group_id}", response_model=schemas.GroupOut)
def read_group(group_id: int, db: Session = Depends(get_db)):
    return get_group(db, group_id)

@router.put("/{group_id}", response_model=schemas.GroupOut)
def update_group(group_id: int, data: schemas.GroupUpdate, db: Session = Depends(get_db)):
    g = get_group(db, group_id)
    if data.name is not None:
        g.name = data.name
    if data.description is not None:
        g.description = data.description
    db.commit()
    db.refresh(g)
    log.info("group_updated", group_id=group_id)
    return g

@router.delete("/{group_id}")
def delete_group(group_id: int, db: Session = Depends(get_db)):
    g = get_group(db, group_id)
    db.delete(g)
    db.commit()
    log.info("group_deleted", group_id=group_id)
    return {"message": "Group deleted"}

@router.post("/{group_id}/members", response_model=schemas.MemberOut)
def add_member(group_id: int, member: schemas.MemberCreate, db: Session = Depends(get_db)):
    g = get_group(db, group_id)
    m = models.Member(group_id=g.id, name=member.name, email=member.email or "")
    db.add(m)
    db.commit()
    db.refresh(m)
    log.info("member_added", group_id=group_id, member_id=m.id)
    return m

@router.get("/{group_id}/members", response_model=list[schemas.MemberOut])
def list_group_members(group_id: int, db: Session = Depends(get_db)):
    return get_group(db, group_id).members
