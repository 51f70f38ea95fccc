"""FeeDesk - FastAPI entrypoint."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import ServerSelectionTimeoutError

from feedesk.api import auth, fee_plans, reports, settings as settings_api, students, transactions
from feedesk.config import settings
from feedesk.db import db_shutdown, init_db
from feedesk.errors import FeeDeskError
from feedesk.seed import seed_admin

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        await init_db()
        await seed_admin()
    except ServerSelectionTimeoutError as e:
        logger.error("MongoDB is not reachable at %s", settings.mongodb_url)
        raise RuntimeError("MongoDB connection failed. Check MONGODB_URL.") from e
    yield
    await db_shutdown()


app = FastAPI(
    title=settings.app_name,
    description="Fee plans, student enrollment, payment collection and ledger reports",
    version="0.1.0",
    lifespan=lifespan,
)


@app.exception_handler(FeeDeskError)
async def feedesk_exception_handler(request: Request, exc: FeeDeskError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": jsonable_errors(exc)},
    )


def jsonable_errors(exc: RequestValidationError) -> list[dict]:
    # ctx may hold the raw exception object from a model validator
    return [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]


app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(settings_api.router, prefix="/api/settings", tags=["Settings"])
app.include_router(fee_plans.router, prefix="/api/fee-plans", tags=["Fee Plans"])
app.include_router(students.router, prefix="/api/students", tags=["Students"])
app.include_router(transactions.router, prefix="/api/transactions", tags=["Transactions"])
app.include_router(reports.router, prefix="/api/reports", tags=["Reports"])


@app.get("/api/health")
def health():
    return {"status": "ok", "app": settings.app_name}
