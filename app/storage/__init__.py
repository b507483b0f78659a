# Storage backends

from app.storage.base import AssetStore
from app.storage.supabase_storage import SupabaseAssetStore

__all__ = ["AssetStore", "SupabaseAssetStore"]
