"""Authentication module for loading the Telegraph access token.

This module loads the Telegraph account token from environment variables
using python-dotenv. It validates that the token is present and raises
InvalidCredentialsError if it is missing.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .errors import InvalidCredentialsError

DEFAULT_API_URL = "https://api.telegra.ph"


class Credentials(NamedTuple):
    """Telegraph API credentials."""
    api_url: str
    access_token: str


class Authenticator:
    """Loads and validates the Telegraph access token from environment variables.

    The token is loaded from a .env file using python-dotenv and is never
    cached or logged.

    Environment variables:
        TELEGRAPH_ACCESS_TOKEN: Access token of the Telegraph account (required)
        TELEGRAPH_API_URL: API base URL (default: https://api.telegra.ph)

    Raises:
        InvalidCredentialsError: If the access token is missing

    Example:
        >>> auth = Authenticator()
        >>> creds = auth.get_credentials()
        >>> print(f"Connecting to {creds.api_url}")
    """

    def __init__(self, api_url: Optional[str] = None):
        """Initialize the authenticator by loading environment variables from .env file.

        Args:
            api_url: API base URL overriding TELEGRAPH_API_URL
        """
        load_dotenv()
        self._api_url = api_url

    def get_api_url(self) -> str:
        """Get the API base URL; never requires the access token."""
        api_url = self._api_url or os.getenv('TELEGRAPH_API_URL') or DEFAULT_API_URL
        return api_url.rstrip('/')

    def get_credentials(self) -> Credentials:
        """Get the Telegraph credentials from environment variables.

        Returns:
            Credentials: A named tuple containing api_url and access_token

        Raises:
            InvalidCredentialsError: If TELEGRAPH_ACCESS_TOKEN is missing
        """
        api_url = self.get_api_url()
        access_token = os.getenv('TELEGRAPH_ACCESS_TOKEN')

        if not access_token:
            raise InvalidCredentialsError(endpoint=api_url)

        return Credentials(api_url=api_url, access_token=access_token)
