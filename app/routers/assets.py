"""Asset API: upload, inspect, list and sign project files."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile

from app.config import DEFAULT_UPLOAD_FOLDER, SIGNED_URL_EXPIRES_IN
from app.core.errors import StorageError
from app.dependencies import get_asset_store
from app.schemas.asset import (
    ExistsResponse,
    FileMetadata,
    ListedObject,
    SignedUploadUrlRequest,
    UploadOptions,
    UploadResult,
    UrlResponse,
)
from app.storage.base import AssetStore

router = APIRouter(tags=["assets"])

Store = Annotated[AssetStore, Depends(get_asset_store)]


def _http_error(e: StorageError) -> HTTPException:
    return HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/assets", response_model=UploadResult, status_code=201)
async def upload_asset(
    store: Store,
    file: UploadFile = File(...),
    folder: str = Form(DEFAULT_UPLOAD_FOLDER),
    projectName: str | None = Form(None),
) -> UploadResult:
    """Upload one file. Type and size are checked against the store defaults."""
    if not file.filename:
        raise HTTPException(status_code=400, detail="Filename is required")
    content = await file.read()
    options = UploadOptions(folder=folder, projectName=projectName)
    try:
        return await store.upload(
            content,
            file.filename,
            file.content_type or "application/octet-stream",
            len(content),
            options,
        )
    except StorageError as e:
        raise _http_error(e) from e


@router.delete("/assets", status_code=204)
async def delete_asset(store: Store, key: str = Query(..., min_length=1)) -> None:
    try:
        await store.delete(key)
    except StorageError as e:
        raise _http_error(e) from e


@router.get("/assets/exists", response_model=ExistsResponse)
async def asset_exists(store: Store, key: str = Query(..., min_length=1)) -> ExistsResponse:
    return ExistsResponse(key=key, exists=await store.exists(key))


@router.get("/assets/metadata", response_model=FileMetadata)
async def asset_metadata(store: Store, key: str = Query(..., min_length=1)) -> FileMetadata:
    try:
        return await store.get_metadata(key)
    except StorageError as e:
        raise _http_error(e) from e


@router.get("/assets/public-url", response_model=UrlResponse)
async def asset_public_url(store: Store, key: str = Query(..., min_length=1)) -> UrlResponse:
    return UrlResponse(url=store.get_public_url(key))


@router.post("/assets/signed-upload-url", response_model=UrlResponse)
async def signed_upload_url(body: SignedUploadUrlRequest, store: Store) -> UrlResponse:
    """Signed URL for a direct client upload to key."""
    try:
        url = await store.get_signed_upload_url(body.key, body.contentType, body.expiresIn)
    except StorageError as e:
        raise _http_error(e) from e
    return UrlResponse(url=url)


@router.get("/assets/signed-download-url", response_model=UrlResponse)
async def signed_download_url(
    store: Store,
    key: str = Query(..., min_length=1),
    expiresIn: int = Query(SIGNED_URL_EXPIRES_IN, gt=0),
) -> UrlResponse:
    try:
        url = await store.get_signed_download_url(key, expiresIn)
    except StorageError as e:
        raise _http_error(e) from e
    return UrlResponse(url=url)


@router.get("/projects/{project_name}/files", response_model=list[ListedObject])
async def list_project_files(
    project_name: str,
    store: Store,
    folder: str | None = Query(None, description="Sub-folder inside the project, e.g. videos"),
) -> list[ListedObject]:
    """List up to 1000 files under the project (and folder), sorted by name."""
    try:
        return await store.list_project_files(project_name, folder)
    except StorageError as e:
        raise _http_error(e) from e


@router.post("/projects/{project_name}/folders", status_code=204)
async def create_project_folders(project_name: str, store: Store) -> None:
    await store.create_project_folders(project_name)


@router.post("/projects/{project_name}/videos/{playback_id}/folder", status_code=204)
async def create_video_folder(project_name: str, playback_id: str, store: Store) -> None:
    await store.create_video_folder(project_name, playback_id)
