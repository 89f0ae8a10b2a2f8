# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the SocialHub API:
# - test_credentials.py: Token issuance / verification and the auth gate
# - test_users.py, test_posts.py, test_comments.py: Route behaviour
# - test_supabase_client.py: Query construction against a mocked client
# - test_models.py: Pydantic model validation
#
# Run tests with: pytest
# =============================================================================
