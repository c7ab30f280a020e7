from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ..database import get_db
from .. import schemas
from ..services.snapshot import export_snapshot, import_snapshot

router = APIRouter()

@router.get("", response_model=schemas.Snapshot)
def export_data(db: Session = Depends(get_db)):
    return export_snapshot(db)

@router.put("")
def import_data(snapshot: schemas.Snapshot, db: Session = Depends(get_db)):
    import_snapshot(db, snapshot)
    return {"message": "Snapshot imported"}
