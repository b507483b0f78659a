"""Supabase Storage backend."""

import logging
from typing import Any

from fastapi.concurrency import run_in_threadpool
from storage3.utils import StorageException
from supabase import Client, create_client

from app.config import (
    BUCKET_ALLOWED_MIME_TYPES,
    BUCKET_FILE_SIZE_LIMIT,
    LIST_LIMIT,
    SIGNED_URL_EXPIRES_IN,
    StoreConfig,
)
from app.core.errors import (
    DeleteFailedError,
    ListFailedError,
    MetadataFailedError,
    NotFoundError,
    SignedUrlFailedError,
    StorageError,
    UploadFailedError,
)
from app.core.upload_validation import validate_upload
from app.schemas.asset import FileMetadata, ListedObject, UploadOptions, UploadResult
from app.storage.base import AssetStore
from app.storage.keys import build_object_key, project_prefix, split_key

logger = logging.getLogger(__name__)


def _error_text(e: Exception) -> str:
    return getattr(e, "message", None) or str(e) or type(e).__name__


def _is_not_found(e: StorageException) -> bool:
    status = str(getattr(e, "status", "") or "")
    code = str(getattr(e, "code", "") or "")
    return status == "404" or code in ("not_found", "NoSuchKey")


def _signed_url(data: Any) -> str | None:
    """The SDK has returned signedURL, signedUrl and signed_url across versions."""
    if not isinstance(data, dict):
        return None
    return data.get("signedUrl") or data.get("signedURL") or data.get("signed_url")


def _to_metadata(leaf: str, info: dict) -> FileMetadata:
    """Build FileMetadata from an object info response or a listing entry."""
    meta = info.get("metadata") or {}
    return FileMetadata(
        name=leaf,
        size=info.get("size") if info.get("size") is not None else meta.get("size"),
        lastModified=info.get("last_modified") or info.get("lastModified") or info.get("updated_at"),
        contentType=info.get("content_type") or info.get("contentType") or meta.get("mimetype"),
    )


class SupabaseAssetStore(AssetStore):
    """Store project assets in a Supabase Storage bucket. Returns public URLs."""

    def __init__(self, config: StoreConfig, client: Client | None = None) -> None:
        self.config = config
        self.client = client or create_client(config.endpoint, config.credential)
        self.bucket = config.bucket_name
        logger.info("Supabase storage configured: url=%s bucket=%s", config.endpoint, self.bucket)

    def _files(self):
        return self.client.storage.from_(self.bucket)

    def _has_object_stat(self, files) -> bool:
        """storage3 2.x exposes exists() (HEAD) and info(); older clients only list."""
        return callable(getattr(files, "exists", None)) and callable(getattr(files, "info", None))

    async def initialize(self) -> None:
        try:
            buckets = await run_in_threadpool(self.client.storage.list_buckets)
        except Exception as e:
            logger.error("Error listing buckets: %s", e)
            return

        if any(b.name == self.bucket for b in buckets or []):
            logger.info("Bucket %s already exists", self.bucket)
            return

        logger.info("Creating bucket: %s", self.bucket)
        try:
            await run_in_threadpool(
                self.client.storage.create_bucket,
                self.bucket,
                options={
                    "public": True,
                    "file_size_limit": BUCKET_FILE_SIZE_LIMIT,
                    "allowed_mime_types": list(BUCKET_ALLOWED_MIME_TYPES),
                },
            )
        except Exception as e:
            logger.error("Error creating bucket %s: %s", self.bucket, e)
            return
        logger.info("Bucket %s created successfully", self.bucket)

    async def upload(
        self,
        content: bytes,
        file_name: str,
        mime_type: str,
        size: int,
        options: UploadOptions | None = None,
    ) -> UploadResult:
        options = options or UploadOptions()
        allowed_types = (
            options.allowedTypes if options.allowedTypes is not None else self.config.allowed_types
        )
        max_size = options.maxSize if options.maxSize is not None else self.config.max_size

        logger.info("Starting upload: name=%s size=%d type=%s", file_name, size, mime_type)
        validate_upload(mime_type, size, allowed_types, max_size)

        key = build_object_key(file_name, options.folder, options.projectName)
        logger.info("Uploading to bucket %s as %s", self.bucket, key)
        try:
            await run_in_threadpool(
                self._files().upload,
                key,
                content,
                file_options={
                    "content-type": mime_type,
                    "cache-control": "3600",
                    "upsert": "false",
                },
            )
            url = self.get_public_url(key)
        except Exception as e:
            logger.error("Supabase upload error for %s: %s", key, e)
            raise UploadFailedError(_error_text(e)) from e

        result = UploadResult(url=url, key=key, bucket=self.bucket, size=size)
        logger.info("Upload completed: %s", result.key)
        return result

    async def delete(self, key: str) -> None:
        try:
            await run_in_threadpool(self._files().remove, [key])
        except Exception as e:
            logger.error("Supabase delete error for %s: %s", key, e)
            raise DeleteFailedError(_error_text(e)) from e

    async def get_signed_upload_url(
        self, key: str, content_type: str, expires_in: int = SIGNED_URL_EXPIRES_IN
    ) -> str:
        # Signed upload URLs have a fixed lifetime on the Supabase side
        if expires_in != SIGNED_URL_EXPIRES_IN:
            logger.debug("expires_in=%d not applied to signed upload URL for %s", expires_in, key)
        try:
            data = await run_in_threadpool(self._files().create_signed_upload_url, key)
        except Exception as e:
            logger.error("Supabase signed upload URL error for %s: %s", key, e)
            raise SignedUrlFailedError(_error_text(e)) from e
        url = _signed_url(data)
        if not url:
            raise SignedUrlFailedError(f"no signed URL returned for {key}")
        return url

    async def get_signed_download_url(
        self, key: str, expires_in: int = SIGNED_URL_EXPIRES_IN
    ) -> str:
        try:
            data = await run_in_threadpool(self._files().create_signed_url, key, expires_in)
        except Exception as e:
            logger.error("Supabase signed download URL error for %s: %s", key, e)
            raise SignedUrlFailedError(_error_text(e)) from e
        url = _signed_url(data)
        if not url:
            raise SignedUrlFailedError(f"no signed URL returned for {key}")
        return url

    async def _list_leaf(self, files, key: str) -> list[dict]:
        """List the parent prefix of key, searching for its leaf name."""
        parent, leaf = split_key(key)
        return await run_in_threadpool(files.list, parent, {"search": leaf}) or []

    async def exists(self, key: str) -> bool:
        files = self._files()
        try:
            if self._has_object_stat(files):
                return bool(await run_in_threadpool(files.exists, key))
            return len(await self._list_leaf(files, key)) > 0
        except Exception as e:
            logger.debug("Existence check for %s failed, treating as missing: %s", key, e)
            return False

    async def get_metadata(self, key: str) -> FileMetadata:
        files = self._files()
        _, leaf = split_key(key)
        try:
            if self._has_object_stat(files):
                return await self._stat(files, key, leaf)

            entries = await self._list_leaf(files, key)
            if not entries:
                raise NotFoundError(f"File not found: {key}")
            # search is a prefix match; prefer the exact name
            info = next((f for f in entries if f.get("name") == leaf), entries[0])
            return _to_metadata(leaf, info)
        except StorageError:
            raise
        except Exception as e:
            logger.error("Supabase metadata error for %s: %s", key, e)
            raise MetadataFailedError(_error_text(e)) from e

    async def _stat(self, files, key: str, leaf: str) -> FileMetadata:
        try:
            info = await run_in_threadpool(files.info, key)
        except StorageException as e:
            if _is_not_found(e):
                raise NotFoundError(f"File not found: {key}") from e
            raise
        if not info:
            raise NotFoundError(f"File not found: {key}")
        return _to_metadata(leaf, info)

    async def list_project_files(
        self, project_name: str, folder: str | None = None
    ) -> list[ListedObject]:
        prefix = project_prefix(project_name, folder)
        try:
            entries = await run_in_threadpool(
                self._files().list,
                prefix,
                {
                    "limit": LIST_LIMIT,
                    "offset": 0,
                    "sortBy": {"column": "name", "order": "asc"},
                },
            )
            return [
                ListedObject(
                    Key=f"{prefix}/{f['name']}",
                    Size=(f.get("metadata") or {}).get("size"),
                    LastModified=f.get("updated_at"),
                )
                for f in entries or []
            ]
        except Exception as e:
            logger.error("Supabase list error for %s: %s", prefix, e)
            raise ListFailedError(_error_text(e)) from e

    def get_public_url(self, key: str) -> str:
        return self._files().get_public_url(key)

    async def create_project_folders(self, project_name: str) -> None:
        logger.debug("Project folders are virtual in Supabase Storage: %s", project_name)

    async def create_video_folder(self, project_name: str, playback_id: str) -> None:
        logger.debug(
            "Video folders are virtual in Supabase Storage: project=%s playback_id=%s",
            project_name,
            playback_id,
        )
