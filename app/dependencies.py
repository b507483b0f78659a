"""FastAPI dependencies."""

from fastapi import Request

from app.storage.base import AssetStore


def get_asset_store(request: Request) -> AssetStore:
    """
    The process-wide store built in the app lifespan.
    Tests override this dependency with a fake.
    """
    store = getattr(request.app.state, "asset_store", None)
    if store is None:
        raise RuntimeError("Asset store not initialized. It is created in the app lifespan.")
    return store
