"""FastAPI application for student records."""

import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from metrics import router as metrics_router
from db import init_db
from errors import register_exception_handlers
from schemas import RootResponse
from settings import settings
from students.routes import router as students_router

API_VERSION = "1.0.0"

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database ready at %s", settings.database_url.split("@")[-1])
    yield


app = FastAPI(
    title="Student Records",
    description="Student records management API",
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Observability
app.include_router(metrics_router)  # exposes GET /metrics

# Functional routers
app.include_router(students_router)


# --------------------
# Root
# --------------------
@app.get("/", response_model=RootResponse)
async def root():
    return RootResponse(message="Student Records API", version=API_VERSION)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
