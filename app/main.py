from contextlib import asynccontextmanager
import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import LOG_LEVEL, load_store_config
from app.routers import assets
from app.storage import SupabaseAssetStore

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the asset store once per process and make sure its bucket exists."""
    # Raises ConfigurationError when SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY are missing
    config = load_store_config()
    store = SupabaseAssetStore(config)
    await store.initialize()
    app.state.asset_store = store
    logger.info("Asset store ready (bucket=%s)", store.bucket)
    yield
    app.state.asset_store = None


app = FastAPI(
    title="Project Assets API",
    description="Upload and manage project assets in Supabase Storage",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://127.0.0.1:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(assets.router)


@app.get("/")
async def root():
    return {"message": "Project Assets API", "version": "0.1.0"}
