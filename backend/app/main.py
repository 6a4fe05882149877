import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.exceptions import register_exception_handlers
from modules.floor_plans.config.floor_plan_config import floor_plan_config
from modules.floor_plans.routers.floor_plan_editor_router import router as floor_plan_editor_router
from modules.floor_plans.services.editor_session import editor_session_manager

logging.basicConfig(
    level=getattr(logging, floor_plan_config.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Floor plan backend: {floor_plan_config.FLOOR_PLAN_API_URL}")
    yield
    await editor_session_manager.close_all()


app = FastAPI(
    title="Floor Plan Editor API",
    description="Grid layout editing for restaurant floor plans",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(floor_plan_editor_router)


@app.get("/", tags=["health"])
def read_root():
    return {"status": "ok", "message": "Floor plan editor API"}
