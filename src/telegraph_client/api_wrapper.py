"""API wrapper for the telegra.ph API.

This module talks to the Telegraph API with requests and provides error
translation from HTTP exceptions and ``{"ok": false}`` responses to our
typed exception hierarchy. It integrates with the retry logic for handling
flood control.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

import requests
from requests.exceptions import ConnectionError, HTTPError, Timeout

from .auth import Authenticator
from .errors import (
    APIAccessError,
    APIUnreachableError,
    InvalidCredentialsError,
    PageNotFoundError,
)
from .retry_logic import retry_on_rate_limit

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30


class TelegraphResponseError(Exception):
    """Raised for a Telegraph response with ``ok`` set to false.

    Attributes:
        error: Telegraph error code (e.g. PAGE_NOT_FOUND, FLOOD_WAIT_5)
    """

    def __init__(self, error: str):
        super().__init__(error)
        self.error = error


class APIWrapper:
    """Wrapper around the Telegraph HTTP API with error translation.

    This class provides a thin wrapper over the Telegraph API that:
    1. Handles authentication using the Authenticator
    2. Translates HTTP errors and Telegraph error codes to typed exceptions
    3. Integrates retry logic for flood control
    4. Keeps access tokens out of log messages

    Example:
        >>> auth = Authenticator()
        >>> api = APIWrapper(auth)
        >>> page = api.get_page("Sample-Page-12-15")
    """

    def __init__(self, authenticator: Authenticator, timeout: float = DEFAULT_TIMEOUT_SECONDS):
        """Initialize the API wrapper.

        Args:
            authenticator: Authenticator instance for loading credentials
            timeout: Timeout of a single HTTP request in seconds
        """
        self._authenticator = authenticator
        self._timeout = timeout
        self._session: Optional[requests.Session] = None

    def _get_session(self) -> requests.Session:
        """Get or create the HTTP session on first use."""
        if self._session is None:
            self._session = requests.Session()
            self._session.headers.update({"Accept": "application/json"})
        return self._session

    def _validate_path(self, path: str) -> None:
        """Validate that a page path is safe to put into a URL.

        Telegraph paths look like ``Sample-Page-12-15``.

        Raises:
            ValueError: If path is empty or contains other characters
        """
        if not path or not str(path).strip():
            raise ValueError("path cannot be empty")
        if not re.match(r'^[\w-]+$', str(path).strip()):
            raise ValueError(
                f"Invalid page path: '{path}'. "
                f"Paths may only contain letters, digits, '_' and '-'."
            )

    def _sanitize_credentials(self, text: str) -> str:
        """Mask access tokens in error messages and log text.

        Example:
            >>> api._sanitize_credentials("editPage?access_token=b968da509bb7 failed")
            "editPage?access_token=***REDACTED*** failed"
        """
        if not text:
            return text

        sanitized = re.sub(
            r'(access_token)["\']?\s*[:=]\s*["\']?([^"\'\s&]+)',
            r'\1=***REDACTED***',
            text,
            flags=re.IGNORECASE,
        )
        sanitized = re.sub(
            r'Bearer\s+[^\s\n\r]+',
            'Bearer ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE,
        )
        sanitized = re.sub(
            r'Authorization:\s*[^\n\r]+',
            'Authorization: ***REDACTED***',
            sanitized,
            flags=re.IGNORECASE,
        )
        return sanitized

    def _translate_error(self, exception: Exception, operation: str) -> Exception:
        """Translate transport and Telegraph errors to typed exceptions.

        Args:
            exception: The original exception
            operation: Description of the operation that failed, e.g. ``getPage(Sample-Page)``

        Returns:
            Exception: Translated exception (one of our typed exceptions)
        """
        endpoint = self._endpoint()

        if isinstance(exception, (Timeout, ConnectionError)):
            return APIUnreachableError(endpoint=endpoint)

        if isinstance(exception, TelegraphResponseError):
            error = exception.error.upper()
            if 'ACCESS_TOKEN' in error:
                return InvalidCredentialsError(endpoint=endpoint)
            if error == 'PAGE_NOT_FOUND':
                return PageNotFoundError(page_id=self._operation_target(operation))

        if isinstance(exception, HTTPError) and exception.response is not None:
            status_code = exception.response.status_code
            if status_code == 401:
                return InvalidCredentialsError(endpoint=endpoint)
            if status_code == 404:
                return PageNotFoundError(page_id=self._operation_target(operation))

        safe_error_msg = self._sanitize_credentials(str(exception))
        logger.error(f"API operation failed: {operation} - {safe_error_msg}")
        return APIAccessError(f"Telegraph API failure during {operation}: {safe_error_msg}")

    def _endpoint(self) -> str:
        return self._authenticator.get_api_url()

    @staticmethod
    def _operation_target(operation: str) -> str:
        match = re.search(r'\(([^)]+)\)', operation)
        return match.group(1) if match else "unknown"

    def _call(
        self,
        method: str,
        params: Dict[str, Any],
        path: Optional[str] = None,
        authenticated: bool = True,
    ) -> Dict[str, Any]:
        """Call a Telegraph API method and return its ``result`` object.

        Raises:
            InvalidCredentialsError: If the access token is missing or rejected
            PageNotFoundError: If the page doesn't exist
            APIUnreachableError: If the API is unreachable
            APIAccessError: If the call fails or flood control persists
        """
        operation = f"{method}({path})" if path else method
        url = f"{self._endpoint()}/{method}" + (f"/{path}" if path else "")
        data = dict(params)
        if authenticated:
            data["access_token"] = self._authenticator.get_credentials().access_token

        def _send() -> Dict[str, Any]:
            response = self._get_session().post(url, data=data, timeout=self._timeout)
            response.raise_for_status()
            payload = response.json()
            if not payload.get("ok"):
                raise TelegraphResponseError(str(payload.get("error", "UNKNOWN_ERROR")))
            return payload.get("result") or {}

        try:
            return retry_on_rate_limit(_send)
        except APIAccessError:
            raise
        except (requests.RequestException, TelegraphResponseError, ValueError) as e:
            raise self._translate_error(e, operation) from e

    def get_page(self, path: str) -> Dict[str, Any]:
        """Fetch a page with its content.

        Args:
            path: Telegraph page path

        Returns:
            Dict containing the Telegraph ``Page`` object
        """
        self._validate_path(path)
        logger.debug(f"Fetching page {path}")
        return self._call("getPage", {"return_content": "true"}, path=path, authenticated=False)

    def create_page(
        self,
        title: str,
        content: List[Any],
        author_name: Optional[str] = None,
        author_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Create a new page.

        Args:
            title: Page title
            content: Telegraph ``content`` array (see nodes_to_json)
            author_name: Author display name
            author_url: Author profile link

        Returns:
            Dict containing the created ``Page`` object
        """
        params = self._page_params(title, content, author_name, author_url)
        logger.debug(f"Creating page '{title}'")
        return self._call("createPage", params)

    def edit_page(
        self,
        path: str,
        title: str,
        content: List[Any],
        author_name: Optional[str] = None,
        author_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Replace the title and content of an existing page.

        Returns:
            Dict containing the edited ``Page`` object
        """
        self._validate_path(path)
        params = self._page_params(title, content, author_name, author_url)
        logger.debug(f"Editing page {path}")
        return self._call("editPage", params, path=path)

    @staticmethod
    def _page_params(
        title: str,
        content: List[Any],
        author_name: Optional[str],
        author_url: Optional[str],
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "title": title,
            "content": json.dumps(content, ensure_ascii=False),
            "return_content": "true",
        }
        if author_name:
            params["author_name"] = author_name
        if author_url:
            params["author_url"] = author_url
        return params
