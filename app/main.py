import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from app.config import CORS_ORIGINS, DUMMY_MODE, STATIC_DIR
from app.routers import diagnose, feedback
from app.services.llm import get_llm_client
from app.services.suggestions import SUGGESTION_TABLE

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Starting MyAutoSound...")
    llm = get_llm_client()
    logger.info(
        "LLM provider: %s (available=%s, dummy=%s)",
        llm.provider, llm.available(), DUMMY_MODE,
    )
    logger.info("Loaded %d suggestion groups", len(SUGGESTION_TABLE))
    yield
    logger.info("MyAutoSound shut down")


app = FastAPI(
    title="MyAutoSound",
    description="AI car noise diagnosis - transcription, mechanic diagnosis and DIY links",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(diagnose.router)
app.include_router(feedback.router)

# Serve static files
app.mount("/static", StaticFiles(directory=STATIC_DIR, check_dir=False), name="static")


@app.get("/")
async def serve_form_ui():
    return FileResponse(Path(STATIC_DIR) / "index.html")
