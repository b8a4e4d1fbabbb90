import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ewm.cache import cache
from ewm.config import settings
from ewm.error_handlers import register_error_handlers
from ewm.middleware import TimingMiddleware
from ewm.routers import comments, events, metrics, users

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await cache.connect()
    logger.info("ewm-main started (env=%s)", settings.APP_ENV)
    yield
    await cache.disconnect()


app = FastAPI(
    title="Explore With Me - main service",
    description="Events, users and the comment gate",
    version="1.0.0",
    lifespan=lifespan,
)

# Middleware
app.add_middleware(TimingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routers
app.include_router(users.router)
app.include_router(events.router)
app.include_router(comments.private_router)
app.include_router(comments.admin_router)
app.include_router(comments.public_router)
app.include_router(metrics.router)


@app.get("/health")
async def health():
    return {"status": "healthy", "version": "1.0.0"}
