"""FastAPI application exposing the credibility client."""

import contextlib
import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from .env file
load_dotenv()

from ..infrastructure.dependencies import get_service_container
from .endpoints import evaluation, health, history, knowledge

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Start the service container's adapters and close them on exit."""
    container = get_service_container()
    await container.startup()
    logger.info("🚀 Credibility client API ready")

    yield

    await container.shutdown()


app = FastAPI(
    title="Credibility Client API",
    description="Submit information for credibility scoring and browse past evaluations",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(evaluation.router)
app.include_router(history.router)
app.include_router(knowledge.router)
