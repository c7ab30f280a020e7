from fastapi import APIRouter, Depends, Query
from sqlalchemy import select
from sqlalchemy.orm import Session
from ..database import get_db
from .. import models, schemas
from ..services.budgets import monthly_insights, monthly_summary, monthly_trends

router = APIRouter()

@router.get("/monthly", response_model=schemas.MonthlySummary)
def get_monthly_summary(month: str = Query(pattern=schemas.MONTH_PATTERN), db: Session = Depends(get_db)):
    return monthly_summary(db.scalars(select(models.Transaction)).all(), month)

@router.get("/trends", response_model=list[schemas.MonthlySummary])
def get_monthly_trends(end_month: str = Query(pattern=schemas.MONTH_PATTERN), months: int = Query(default=6, ge=1, le=36),
                       db: Session = Depends(get_db)):
    return monthly_trends(db.scalars(select(models.Transaction)).all(), end_month, months)

@router.get("/insights", response_model=schemas.MonthlyInsights)
def get_monthly_insights(month: str = Query(pattern=schemas.MONTH_PATTERN), db: Session = Depends(get_db)):
    budgets = db.scalars(select(models.Budget).filter_by(month=month)).all()
    return monthly_insights(db.scalars(select(models.Transaction)).all(), budgets, month)
