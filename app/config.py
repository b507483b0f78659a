"""Application configuration."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel

from app.core.errors import ConfigurationError

# Load .env so SUPABASE_* and other vars are available
load_dotenv()

# Supabase Storage
SUPABASE_URL = os.getenv("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.getenv("SUPABASE_SERVICE_ROLE_KEY", "")
SUPABASE_BUCKET_NAME = os.getenv("SUPABASE_BUCKET_NAME", "project-assets")

# Per-upload defaults (overridable per call)
DEFAULT_ALLOWED_TYPES = ("image/jpeg", "image/png", "image/gif", "image/webp")
DEFAULT_MAX_UPLOAD_SIZE = 5 * 1024 * 1024  # 5 MB
DEFAULT_UPLOAD_FOLDER = "uploads"

# Raw values; parsed by load_store_config()
UPLOAD_ALLOWED_TYPES = os.getenv("UPLOAD_ALLOWED_TYPES", "")
UPLOAD_MAX_SIZE = os.getenv("UPLOAD_MAX_SIZE", "")

# Applied only when the bucket has to be created at startup
BUCKET_FILE_SIZE_LIMIT = 50 * 1024 * 1024  # 50 MB
BUCKET_ALLOWED_MIME_TYPES = (
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "video/mp4",
    "video/webm",
    "video/quicktime",
)

# Signed URL lifetime (seconds)
SIGNED_URL_EXPIRES_IN = 3600

# Max entries returned by a single project listing
LIST_LIMIT = 1000

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


class StoreConfig(BaseModel):
    """Resolved storage settings. Built once at startup."""

    endpoint: str
    credential: str
    bucket_name: str = "project-assets"
    allowed_types: tuple[str, ...] = DEFAULT_ALLOWED_TYPES
    max_size: int = DEFAULT_MAX_UPLOAD_SIZE

    model_config = {"frozen": True}


def load_store_config() -> StoreConfig:
    """
    Build StoreConfig from the environment.
    Raises ConfigurationError if endpoint or credential is missing or an upload default is malformed.
    """
    if not SUPABASE_URL:
        raise ConfigurationError("SUPABASE_URL environment variable is required")
    if not SUPABASE_SERVICE_ROLE_KEY:
        raise ConfigurationError("SUPABASE_SERVICE_ROLE_KEY environment variable is required")

    allowed_types = tuple(t.strip() for t in UPLOAD_ALLOWED_TYPES.split(",") if t.strip())

    max_size = DEFAULT_MAX_UPLOAD_SIZE
    if UPLOAD_MAX_SIZE.strip():
        try:
            max_size = int(UPLOAD_MAX_SIZE)
        except ValueError as e:
            raise ConfigurationError(
                f"UPLOAD_MAX_SIZE must be an integer number of bytes, got {UPLOAD_MAX_SIZE!r}"
            ) from e
        if max_size < 0:
            raise ConfigurationError("UPLOAD_MAX_SIZE must not be negative")

    return StoreConfig(
        endpoint=SUPABASE_URL,
        credential=SUPABASE_SERVICE_ROLE_KEY,
        bucket_name=SUPABASE_BUCKET_NAME or "project-assets",
        allowed_types=allowed_types or DEFAULT_ALLOWED_TYPES,
        max_size=max_size,
    )
