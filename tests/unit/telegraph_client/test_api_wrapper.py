"""Unit tests for telegraph_client.api_wrapper module."""

import json
from unittest.mock import Mock, patch

import pytest
from requests.exceptions import ConnectionError, HTTPError, Timeout

from src.telegraph_client.api_wrapper import APIWrapper, TelegraphResponseError
from src.telegraph_client.errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    PageNotFoundError,
)
from tests.fixtures.sample_html import API_PAGE_RESULT


def create_mock_auth(token="b968da509bb7"):
    """Create a mock authenticator with standard credentials."""
    mock_auth = Mock()
    mock_auth.get_api_url.return_value = "https://api.telegra.ph"
    mock_auth.get_credentials.return_value = Mock(api_url="https://api.telegra.ph", access_token=token)
    return mock_auth


def response(payload, status_code=200):
    mock_response = Mock()
    mock_response.status_code = status_code
    mock_response.json.return_value = payload
    if status_code >= 400:
        error = HTTPError(f"{status_code} Error")
        error.response = mock_response
        mock_response.raise_for_status.side_effect = error
    return mock_response


@pytest.fixture
def session():
    return Mock()


@pytest.fixture
def wrapper(session):
    api = APIWrapper(create_mock_auth())
    with patch.object(api, "_get_session", return_value=session):
        yield api


class TestAPIWrapper:
    """Test cases for APIWrapper requests."""

    @patch("src.telegraph_client.api_wrapper.requests.Session")
    def test_init_lazy_loads_session(self, mock_session):
        """__init__ should not create the session or read credentials."""
        mock_auth = Mock()
        APIWrapper(mock_auth)

        mock_auth.get_credentials.assert_not_called()
        mock_session.assert_not_called()

    def test_get_page(self, wrapper, session):
        session.post.return_value = response({"ok": True, "result": API_PAGE_RESULT})

        result = wrapper.get_page("Release-notes-10-19")

        assert result == API_PAGE_RESULT
        session.post.assert_called_once_with(
            "https://api.telegra.ph/getPage/Release-notes-10-19",
            data={"return_content": "true"},
            timeout=30,
        )

    def test_create_page_sends_token_and_content(self, wrapper, session):
        session.post.return_value = response({"ok": True, "result": API_PAGE_RESULT})
        content = [{"tag": "p", "children": ["Привет"]}]

        wrapper.create_page("Release notes", content, author_name="Anna")

        url = session.post.call_args.args[0]
        data = session.post.call_args.kwargs["data"]
        assert url == "https://api.telegra.ph/createPage"
        assert data["access_token"] == "b968da509bb7"
        assert data["title"] == "Release notes"
        assert data["author_name"] == "Anna"
        assert "author_url" not in data
        assert json.loads(data["content"]) == content
        assert "Привет" in data["content"]

    def test_edit_page_targets_path(self, wrapper, session):
        session.post.return_value = response({"ok": True, "result": API_PAGE_RESULT})

        wrapper.edit_page("Release-notes-10-19", "Release notes", [], author_url="https://t.me/anna")

        assert session.post.call_args.args[0] == "https://api.telegra.ph/editPage/Release-notes-10-19"
        assert session.post.call_args.kwargs["data"]["author_url"] == "https://t.me/anna"

    def test_missing_token_raises_before_request(self, session):
        auth = create_mock_auth()
        auth.get_credentials.side_effect = InvalidCredentialsError("https://api.telegra.ph")
        api = APIWrapper(auth)

        with patch.object(api, "_get_session", return_value=session):
            with pytest.raises(InvalidCredentialsError):
                api.create_page("Title", [])
        session.post.assert_not_called()

    @pytest.mark.parametrize("path", ["", "   ", "../etc/passwd", "a/b", "page?x=1"])
    def test_invalid_path_rejected(self, wrapper, session, path):
        with pytest.raises(ValueError):
            wrapper.get_page(path)
        session.post.assert_not_called()


class TestErrorTranslation:
    """Test cases for translating failures to typed errors."""

    def test_page_not_found_response(self, wrapper, session):
        session.post.return_value = response({"ok": False, "error": "PAGE_NOT_FOUND"})

        with pytest.raises(PageNotFoundError) as exc_info:
            wrapper.get_page("Missing-Page")

        assert exc_info.value.page_id == "Missing-Page"

    def test_invalid_token_response(self, wrapper, session):
        session.post.return_value = response({"ok": False, "error": "ACCESS_TOKEN_INVALID"})

        with pytest.raises(InvalidCredentialsError):
            wrapper.create_page("Title", [])

    def test_http_404(self, wrapper, session):
        session.post.return_value = response({}, status_code=404)

        with pytest.raises(PageNotFoundError):
            wrapper.get_page("Missing-Page")

    def test_http_401(self, wrapper, session):
        session.post.return_value = response({}, status_code=401)

        with pytest.raises(InvalidCredentialsError):
            wrapper.edit_page("Page", "Title", [])

    @pytest.mark.parametrize("error", [ConnectionError("refused"), Timeout("timed out")])
    def test_unreachable(self, wrapper, session, error):
        session.post.side_effect = error

        with pytest.raises(APIUnreachableError) as exc_info:
            wrapper.get_page("Page")

        assert exc_info.value.endpoint == "https://api.telegra.ph"

    def test_unknown_error_response(self, wrapper, session):
        session.post.return_value = response({"ok": False, "error": "CONTENT_TOO_BIG"})

        with pytest.raises(APIAccessError) as exc_info:
            wrapper.create_page("Title", [])

        assert "CONTENT_TOO_BIG" in str(exc_info.value)

    def test_invalid_json(self, wrapper, session):
        bad = response(None)
        bad.json.side_effect = ValueError("Expecting value")
        session.post.return_value = bad

        with pytest.raises(APIAccessError):
            wrapper.get_page("Page")

    @patch("time.sleep")
    def test_flood_wait_is_retried(self, mock_sleep, wrapper, session):
        session.post.side_effect = [
            response({"ok": False, "error": "FLOOD_WAIT_2"}),
            response({"ok": True, "result": API_PAGE_RESULT}),
        ]

        assert wrapper.get_page("Page") == API_PAGE_RESULT
        mock_sleep.assert_called_once_with(1)

    @patch("time.sleep")
    def test_flood_wait_persisting(self, mock_sleep, wrapper, session):
        session.post.return_value = response({"ok": False, "error": "FLOOD_WAIT_2"})

        with pytest.raises(APIAccessError) as exc_info:
            wrapper.get_page("Page")

        assert str(exc_info.value) == "Telegraph API failure (after 3 retries)"
        assert session.post.call_count == 4

    def test_token_not_in_error_message(self, wrapper, session):
        session.post.side_effect = ValueError("editPage?access_token=b968da509bb7 rejected")

        with pytest.raises(APIAccessError) as exc_info:
            wrapper.edit_page("Page", "Title", [])

        assert "b968da509bb7" not in str(exc_info.value)
        assert "***REDACTED***" in str(exc_info.value)


class TestSanitizeCredentials:
    """Test cases for _sanitize_credentials."""

    def test_masks_bearer_and_authorization(self):
        api = APIWrapper(create_mock_auth())

        assert api._sanitize_credentials("Bearer abc.def") == "Bearer ***REDACTED***"
        assert api._sanitize_credentials("Authorization: secret") == "Authorization: ***REDACTED***"

    def test_empty_text(self):
        assert APIWrapper(create_mock_auth())._sanitize_credentials("") == ""
