# =============================================================================
# tests/test_supabase_client.py - Supabase Gateway Tests
# =============================================================================
# Checks how the gateway builds queries and interprets responses,
# using a mocked Supabase client (no database calls).
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest

from lib.supabase_client import SupabaseClient, SupabaseClientError


@pytest.fixture
def mock_client():
    """Patch get_client to return a MagicMock Supabase client."""
    client = MagicMock()
    with patch.object(SupabaseClient, "get_client", return_value=client):
        yield client


class TestFetch:
    """Single-row lookups."""

    def test_fetch_post(self, mock_client):
        query = mock_client.table.return_value.select.return_value.eq.return_value.single.return_value
        query.execute.return_value = MagicMock(data={"id": "p1", "title": "T"})

        post = SupabaseClient.fetch_post("p1")

        assert post == {"id": "p1", "title": "T"}
        mock_client.table.assert_called_with("posts")
        mock_client.table.return_value.select.return_value.eq.assert_called_with("id", "p1")

    def test_fetch_missing_returns_none(self, mock_client):
        query = mock_client.table.return_value.select.return_value.eq.return_value.single.return_value
        query.execute.side_effect = Exception("{'code': 'PGRST116', 'message': 'no rows'}")

        assert SupabaseClient.fetch_user_by_email("nobody@example.com") is None

    def test_fetch_other_error_raises(self, mock_client):
        query = mock_client.table.return_value.select.return_value.eq.return_value.single.return_value
        query.execute.side_effect = Exception("connection refused")

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.fetch_post("p1")

        assert exc_info.value.code == "FETCH_FAILED"


class TestAtomicUpdates:
    """Set mutations go through SQL functions."""

    def test_add_like_calls_function(self, mock_client):
        mock_client.rpc.return_value.execute.return_value = MagicMock(data=[{"id": "p1", "likes": ["b@x.com"]}])

        post = SupabaseClient.add_like("p1", "b@x.com")

        mock_client.rpc.assert_called_once_with("add_post_like", {"p_post_id": "p1", "p_email": "b@x.com"})
        assert post["likes"] == ["b@x.com"]

    def test_no_row_means_condition_failed(self, mock_client):
        mock_client.rpc.return_value.execute.return_value = MagicMock(data=[])

        assert SupabaseClient.remove_like("p1", "b@x.com") is None
        mock_client.rpc.assert_called_once_with("remove_post_like", {"p_post_id": "p1", "p_email": "b@x.com"})

    def test_follow_calls_function(self, mock_client):
        mock_client.rpc.return_value.execute.return_value = MagicMock(data=[{"id": "u1"}])

        SupabaseClient.add_follower("u1", "b@x.com")

        mock_client.rpc.assert_called_once_with("follow_user", {"p_user_id": "u1", "p_email": "b@x.com"})

    def test_create_comment_calls_function(self, mock_client):
        mock_client.rpc.return_value.execute.return_value = MagicMock(data=[{"id": "c1"}])

        comment = SupabaseClient.create_comment("p1", "c@x.com", "hi")

        mock_client.rpc.assert_called_once_with(
            "create_comment", {"p_post_id": "p1", "p_author": "c@x.com", "p_text": "hi"}
        )
        assert comment == {"id": "c1"}

    def test_rpc_failure_raises(self, mock_client):
        mock_client.rpc.return_value.execute.side_effect = Exception("function does not exist")

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.remove_follower("u1", "b@x.com")

        assert exc_info.value.code == "RPC_FAILED"


class TestPostQueries:
    """Listing, deletion and counting."""

    def test_fetch_posts_by_author_newest_first(self, mock_client):
        query = mock_client.table.return_value.select.return_value
        ordered = query.eq.return_value.order.return_value
        ordered.execute.return_value = MagicMock(data=[{"id": "p2"}, {"id": "p1"}])

        posts = SupabaseClient.fetch_posts(author="a@x.com")

        query.eq.assert_called_once_with("author", "a@x.com")
        query.eq.return_value.order.assert_called_once_with("created_at", desc=True)
        assert [p["id"] for p in posts] == ["p2", "p1"]

    def test_delete_filters_on_author(self, mock_client):
        deleted = mock_client.table.return_value.delete.return_value
        deleted.eq.return_value.eq.return_value.execute.return_value = MagicMock(data=[{"id": "p1"}])

        assert SupabaseClient.delete_post("p1", "a@x.com") is True
        deleted.eq.assert_called_once_with("id", "p1")
        deleted.eq.return_value.eq.assert_called_once_with("author", "a@x.com")

    def test_delete_nothing_matched(self, mock_client):
        deleted = mock_client.table.return_value.delete.return_value
        deleted.eq.return_value.eq.return_value.execute.return_value = MagicMock(data=[])

        assert SupabaseClient.delete_post("p1", "b@x.com") is False

    def test_count_comments(self, mock_client):
        query = mock_client.table.return_value.select.return_value.eq.return_value
        query.execute.return_value = MagicMock(count=3)

        assert SupabaseClient.count_comments("p1") == 3
        mock_client.table.return_value.select.assert_called_once_with("id", count="exact")

    def test_insert_without_data_raises(self, mock_client):
        mock_client.table.return_value.insert.return_value.execute.return_value = MagicMock(data=[])

        with pytest.raises(SupabaseClientError):
            SupabaseClient.insert_post({"title": "T", "author": "a@x.com"})

    def test_empty_id_lists_skip_queries(self, mock_client):
        assert SupabaseClient.fetch_comments([]) == []
        assert SupabaseClient.fetch_users_by_email([]) == []
        mock_client.table.assert_not_called()
