"""
FastAPI app assembly: logging, middleware, error handlers and router wiring.
"""
import logging
import os

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

# Configure logging
LOG_LEVEL_NAME = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_LEVEL = getattr(logging, LOG_LEVEL_NAME, logging.INFO)
logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)
logger.setLevel(LOG_LEVEL)
logger.info("app_startup: log_level=%s", LOG_LEVEL_NAME)

from vhr.api.auth import router as auth_router
from vhr.api.business import router as business_router
from vhr.api.credit_notes import router as credit_notes_router
from vhr.api.currencies import router as currencies_router
from vhr.api.customers import router as customers_router
from vhr.api.financial_statements import router as financial_statements_router
from vhr.api.heads_up import router as heads_up_router
from vhr.api.installments import router as installments_router
from vhr.api.invoices import router as invoices_router
from vhr.api.matters import router as matters_router
from vhr.api.notes import router as notes_router
from vhr.api.time_bills import router as time_bills_router
from vhr.api.user_groups import router as user_groups_router
from vhr.api.users import router as users_router
from vhr.utils.settings import get_settings

# Database schema is managed by Alembic migrations.

app = FastAPI(
    title="VHR Service",
    description="API for customers, matters, billing, user groups and business taxonomy.",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(get_settings().cors_origins),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _first_error_message(errors) -> str:
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": _first_error_message(errors), "errors": jsonable_encoder(errors)},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


app.include_router(auth_router)
app.include_router(users_router)
app.include_router(user_groups_router)
app.include_router(customers_router)
app.include_router(matters_router)
app.include_router(invoices_router)
app.include_router(installments_router)
app.include_router(credit_notes_router)
app.include_router(financial_statements_router)
app.include_router(time_bills_router)
app.include_router(notes_router)
app.include_router(currencies_router)
app.include_router(business_router)
app.include_router(heads_up_router)


@app.get("/health")
def health_check():
    return {"status": "ok"}
