from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from .config import get_settings
from .database import init_db
from .errors import LedgerError
from .logs import configure_logging, get_logger
from .routers import groups, expenses, settlements, balances, transactions, budgets, reports, snapshot

settings = get_settings()
configure_logging(settings.log_level, settings.log_json)
log = get_logger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    log.info("startup", database_url=settings.database_url)
    yield

app = FastAPI(title="Budget Tracker API", version="1.0.0", lifespan=lifespan)

@app.exception_handler(LedgerError)
async def ledger_error_handler(request: Request, exc: LedgerError):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})

app.include_router(groups.router, prefix="/groups", tags=["groups"])
app.include_router(expenses.router, prefix="/groups/{group_id}/expenses", tags=["expenses"])
app.include_router(settlements.router, prefix="/groups/{group_id}/settlements", tags=["settlements"])
app.include_router(balances.router, prefix="/groups/{group_id}", tags=["ledger"])
app.include_router(transactions.router, prefix="/transactions", tags=["transactions"])
app.include_router(budgets.router, prefix="/budgets", tags=["budgets"])
app.include_router(reports.router, prefix="/reports", tags=["reports"])
app.include_router(snapshot.router, prefix="/snapshot", tags=["snapshot"])

@app.get("/")
def health():
    return {"status": "ok"}
