# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the API:
# - models/: Pydantic schemas for users, posts and comments
# - services/: User directory, post store and comment store
#
# Services talk to the database only through lib.supabase_client.
# =============================================================================
