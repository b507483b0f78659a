"""Abstract asset store."""

from abc import ABC, abstractmethod

from app.config import SIGNED_URL_EXPIRES_IN
from app.schemas.asset import FileMetadata, ListedObject, UploadOptions, UploadResult


class AssetStore(ABC):
    """Interface for project asset storage. One instance per process."""

    bucket: str

    @abstractmethod
    async def initialize(self) -> None:
        """Ensure the bucket exists. Best-effort; never raises."""
        ...

    @abstractmethod
    async def upload(
        self,
        content: bytes,
        file_name: str,
        mime_type: str,
        size: int,
        options: UploadOptions | None = None,
    ) -> UploadResult:
        """
        Validate, store under a fresh key and return its public URL.
        Raises ValidationError before any network call, UploadFailedError on backend failure.
        """
        ...

    @abstractmethod
    async def delete(self, key: str) -> None:
        ...

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """True if an object is stored at key. Backend errors read as False."""
        ...

    @abstractmethod
    async def get_metadata(self, key: str) -> FileMetadata:
        """Raises NotFoundError if nothing is stored at key."""
        ...

    @abstractmethod
    async def list_project_files(
        self, project_name: str, folder: str | None = None
    ) -> list[ListedObject]:
        ...

    @abstractmethod
    async def get_signed_upload_url(
        self, key: str, content_type: str, expires_in: int = SIGNED_URL_EXPIRES_IN
    ) -> str:
        ...

    @abstractmethod
    async def get_signed_download_url(
        self, key: str, expires_in: int = SIGNED_URL_EXPIRES_IN
    ) -> str:
        ...

    @abstractmethod
    def get_public_url(self, key: str) -> str:
        """Pure URL derivation, no network call."""
        ...

    async def create_project_folders(self, project_name: str) -> None:
        """Folders are key prefixes; nothing to create."""

    async def create_video_folder(self, project_name: str, playback_id: str) -> None:
        """Folders are key prefixes; nothing to create."""
