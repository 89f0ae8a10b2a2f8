# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - utils.py: Shared utilities (UUID normalization, UTC time)
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.utils import normalize_uuid, utc_now

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Utils
    "normalize_uuid",
    "utc_now",
]
