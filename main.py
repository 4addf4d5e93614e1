from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
import uvicorn

from config import LOG_LEVEL, SEED_TEMPLATES
from database import init_db
from route_modules import combined_router
from service_modules.template_service import template_service

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s"
)
logger = logging.getLogger("fitness_tracker")


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    if SEED_TEMPLATES:
        template_service.seed_defaults()
    logger.info("Fitness tracker API ready")
    yield


app = FastAPI(title="Fitness Tracker", lifespan=lifespan)
app.include_router(combined_router)


@app.middleware("http")
async def add_no_cache_header(request, call_next):
    response = await call_next(request)
    # API responses are per-user; never let a proxy or browser reuse them
    response.headers["Cache-Control"] = "no-cache, no-store, must-revalidate, max-age=0, private"
    response.headers["Pragma"] = "no-cache"
    return response


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import os

    port = int(os.environ.get("PORT", 9007))
    uvicorn.run(app, host="0.0.0.0", port=port)
