from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.config import StoreConfig
from app.core.errors import NotFoundError, UploadFailedError
from app.core.upload_validation import validate_upload
from app.dependencies import get_asset_store
from app.main import app
from app.schemas.asset import FileMetadata, ListedObject, UploadOptions, UploadResult
from app.storage.base import AssetStore
from app.storage.keys import build_object_key, project_prefix
from app.storage.supabase_storage import SupabaseAssetStore

PUBLIC_BASE = "https://example.supabase.co/storage/v1/object/public"


class FakeAssetStore(AssetStore):
    """In-memory store with the same key and validation rules as the Supabase one."""

    def __init__(self, config: StoreConfig) -> None:
        self.config = config
        self.bucket = config.bucket_name
        self.objects: dict[str, dict] = {}
        self.folder_calls: list[tuple] = []

    async def initialize(self) -> None:
        pass

    async def upload(
        self,
        content: bytes,
        file_name: str,
        mime_type: str,
        size: int,
        options: UploadOptions | None = None,
    ) -> UploadResult:
        options = options or UploadOptions()
        allowed = options.allowedTypes if options.allowedTypes is not None else self.config.allowed_types
        max_size = options.maxSize if options.maxSize is not None else self.config.max_size
        validate_upload(mime_type, size, allowed, max_size)
        key = build_object_key(file_name, options.folder, options.projectName)
        if key in self.objects:
            raise UploadFailedError("The resource already exists")
        self.objects[key] = {
            "content": content,
            "mimetype": mime_type,
            "size": size,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        return UploadResult(url=self.get_public_url(key), key=key, bucket=self.bucket, size=size)

    async def delete(self, key: str) -> None:
        self.objects.pop(key, None)

    async def exists(self, key: str) -> bool:
        return key in self.objects

    async def get_metadata(self, key: str) -> FileMetadata:
        if key not in self.objects:
            raise NotFoundError(f"File not found: {key}")
        obj = self.objects[key]
        return FileMetadata(
            name=key.rsplit("/", 1)[-1],
            size=obj["size"],
            lastModified=obj["updated_at"],
            contentType=obj["mimetype"],
        )

    async def list_project_files(self, project_name: str, folder: str | None = None) -> list[ListedObject]:
        prefix = project_prefix(project_name, folder) + "/"
        return [
            ListedObject(Key=k, Size=o["size"], LastModified=o["updated_at"])
            for k, o in sorted(self.objects.items())
            if k.startswith(prefix) and "/" not in k[len(prefix):]
        ]

    async def get_signed_upload_url(self, key: str, content_type: str, expires_in: int = 3600) -> str:
        return f"https://example.supabase.co/storage/v1/object/upload/sign/{self.bucket}/{key}?token=upload"

    async def get_signed_download_url(self, key: str, expires_in: int = 3600) -> str:
        return f"https://example.supabase.co/storage/v1/object/sign/{self.bucket}/{key}?token=dl&expires={expires_in}"

    def get_public_url(self, key: str) -> str:
        return f"{PUBLIC_BASE}/{self.bucket}/{key}"

    async def create_project_folders(self, project_name: str) -> None:
        self.folder_calls.append(("project", project_name))

    async def create_video_folder(self, project_name: str, playback_id: str) -> None:
        self.folder_calls.append(("video", project_name, playback_id))


@pytest.fixture
def store_config():
    return StoreConfig(
        endpoint="https://example.supabase.co",
        credential="service-role-key",
        bucket_name="test-assets",
    )


@pytest.fixture
def mock_client():
    """Supabase client double. Bucket-level calls land on mock_client.storage.from_.return_value."""
    client = MagicMock()
    files = client.storage.from_.return_value
    files.get_public_url.side_effect = lambda key: f"{PUBLIC_BASE}/test-assets/{key}"
    files.upload.return_value = {"Key": "ignored"}
    files.remove.return_value = []
    files.list.return_value = []
    return client


@pytest.fixture
def bucket_api(mock_client):
    return mock_client.storage.from_.return_value


@pytest.fixture
def store(store_config, mock_client):
    return SupabaseAssetStore(store_config, client=mock_client)


@pytest.fixture
def fake_store(store_config):
    return FakeAssetStore(store_config)


@pytest.fixture
def client(fake_store):
    """FastAPI test client backed by the in-memory store."""
    app.dependency_overrides[get_asset_store] = lambda: fake_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def png_bytes():
    """10-byte payload starting with the PNG signature."""
    return b"\x89PNG\r\n\x1a\n\x00\x00"


@pytest.fixture
def listing_client():
    """Client whose bucket API predates exists()/info(), so lookups go through list()."""
    client = MagicMock()
    files = MagicMock(
        spec=["upload", "remove", "list", "get_public_url", "create_signed_url", "create_signed_upload_url"]
    )
    files.get_public_url.side_effect = lambda key: f"{PUBLIC_BASE}/test-assets/{key}"
    files.list.return_value = []
    client.storage.from_.return_value = files
    return client


@pytest.fixture
def listing_api(listing_client):
    return listing_client.storage.from_.return_value


@pytest.fixture
def listing_store(store_config, listing_client):
    return SupabaseAssetStore(store_config, client=listing_client)
