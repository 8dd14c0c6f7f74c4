import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from compiler.core.config import get_settings
from compiler.core.logging import setup_logging
from compiler.api.routers import auth as r_auth
from compiler.api.routers import compile as r_compile
from compiler.api.routers import submissions as r_submissions
from compiler.db.session import engine
from compiler.db.models import Base
from sqlalchemy.exc import SQLAlchemyError

setup_logging()
settings = get_settings()
logger = logging.getLogger("compiler")

app = FastAPI(title=settings.APP_NAME)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(r_auth.router, prefix=settings.API_PREFIX)
app.include_router(r_compile.router, prefix=settings.API_PREFIX)
app.include_router(r_submissions.router, prefix=settings.API_PREFIX)


@app.get(f"{settings.API_PREFIX}/health")
async def health():
    return {"ok": True}


@app.on_event("startup")
async def ensure_schema():
    # runs still work without a database; only history and sharing go away
    try:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError):
        logger.warning("database unreachable at startup, continuing without persistence", exc_info=True)
