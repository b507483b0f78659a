"""Pydantic schemas for the asset storage API."""


from pydantic import BaseModel, Field

from app.config import DEFAULT_UPLOAD_FOLDER, SIGNED_URL_EXPIRES_IN


class UploadOptions(BaseModel):
    """Per-upload policy. None falls back to the store defaults."""

    folder: str = DEFAULT_UPLOAD_FOLDER
    allowedTypes: list[str] | None = None
    maxSize: int | None = Field(default=None, ge=0)
    projectName: str | None = None


class UploadResult(BaseModel):
    """Stored asset as returned to the caller."""

    url: str
    key: str
    bucket: str
    size: int


class FileMetadata(BaseModel):
    name: str
    size: int | None = None
    lastModified: str | None = None
    contentType: str | None = None


class ListedObject(BaseModel):
    """One entry of a project listing, in the usual object-storage listing shape."""

    Key: str
    Size: int | None = None
    LastModified: str | None = None


class SignedUploadUrlRequest(BaseModel):
    key: str
    contentType: str
    expiresIn: int = Field(default=SIGNED_URL_EXPIRES_IN, gt=0)


class UrlResponse(BaseModel):
    url: str


class ExistsResponse(BaseModel):
    key: str
    exists: bool
