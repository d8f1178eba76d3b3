from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from auth import router as auth_router
from calculations import router as calculations_router
from core import db, settings
from core.errors import install_exception_handlers
from core.limits import BodySizeLimitMiddleware
from core.log import configure_logging
from customers import router as customers_router
from diagnostics import router as diagnostics_router
from onboarding import router as onboarding_router

configure_logging()
logger = logging.getLogger(__name__)

API_PREFIX = "/api"


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process. A failed connect is logged and
    # the API keeps serving; DB-backed routes then answer with 500.
    try:
        await db.init_pool()
        logger.info("database_connected target=%s", settings.database_label())
    except Exception:
        logger.exception("database_connect_failed target=%s", settings.database_label())
    try:
        yield
    finally:
        await db.close_pool()


app = FastAPI(lifespan=lifespan)

# Configured origins only when CORS_ORIGINS is set, otherwise open (dev).
_origins = settings.cors_origins()
if _origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.add_middleware(BodySizeLimitMiddleware)

install_exception_handlers(app)

app.include_router(diagnostics_router.router, prefix=API_PREFIX, tags=["diagnostics"])
app.include_router(auth_router.router, prefix=API_PREFIX, tags=["auth"])
app.include_router(customers_router.router, prefix=API_PREFIX, tags=["customers"])
app.include_router(calculations_router.router, prefix=API_PREFIX, tags=["kalkulationen"])
app.include_router(onboarding_router.router, prefix=API_PREFIX, tags=["onboarding"])
# Must stay last.
app.include_router(diagnostics_router.fallback_router)
