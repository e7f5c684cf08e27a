"""OAuth2 authorization for the Google Drive API."""

import json
import logging
from pathlib import Path
from typing import Any, Callable

import requests
from google.auth.exceptions import RefreshError
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from oauthlib.oauth2.rfc6749.errors import OAuth2Error
from rich.console import Console

logger = logging.getLogger(__name__)

console = Console()


class CredentialsError(Exception):
    """Raised when client credentials or the token cache cannot be used."""


class CredentialManager:
    """Loads client credentials and obtains an authorized token.

    The token is cached in ``token_file``. When no usable token is cached the
    user is walked through the authorization-code flow on the terminal.
    """

    def __init__(
        self,
        credentials_file: Path,
        token_file: Path,
        scopes: list[str],
        prompt: Callable[[str], str] = input,
    ) -> None:
        """Initialize the manager.

        Args:
            credentials_file: Path to the installed-app client secrets JSON
            token_file: Path to the cached token JSON
            scopes: OAuth scopes to request
            prompt: Reads one line of user input (the authorization code)
        """
        self.credentials_file = Path(credentials_file)
        self.token_file = Path(token_file)
        self.scopes = scopes
        self._prompt = prompt

    def load_client_config(self) -> dict[str, Any]:
        """Read the client secrets file.

        Raises:
            CredentialsError: If the file is missing, unparsable or malformed
        """
        try:
            with open(self.credentials_file) as f:
                client_config = json.load(f)
        except (OSError, ValueError) as e:
            raise CredentialsError(f"Error loading client secret file: {e}") from e

        installed = client_config.get("installed") if isinstance(client_config, dict) else None
        if not isinstance(installed, dict):
            raise CredentialsError(
                f"Error loading client secret file: {self.credentials_file} has no 'installed' section"
            )
        for key in ("client_id", "client_secret", "redirect_uris"):
            if not installed.get(key):
                raise CredentialsError(
                    f"Error loading client secret file: missing installed.{key} in {self.credentials_file}"
                )

        return client_config

    def _load_token(self) -> Credentials | None:
        """Read the cached token, or None if absent or unreadable."""
        try:
            with open(self.token_file) as f:
                info = json.load(f)
            if not isinstance(info, dict):
                raise ValueError("token file does not hold a JSON object")
            return Credentials.from_authorized_user_info(info, self.scopes)
        except (OSError, ValueError) as e:
            logger.debug("No usable cached token in %s: %s", self.token_file, e)
            return None

    def _save_token(self, creds: Credentials) -> None:
        try:
            self.token_file.write_text(creds.to_json())
        except OSError as e:
            raise CredentialsError(f"Error storing token to {self.token_file}: {e}") from e
        logger.info("Token stored to %s", self.token_file)

    def _request_token(self, client_config: dict[str, Any]) -> Credentials:
        """Run the interactive authorization-code exchange."""
        redirect_uri = client_config["installed"]["redirect_uris"][0]
        flow = InstalledAppFlow.from_client_config(
            client_config,
            scopes=self.scopes,
            redirect_uri=redirect_uri,
        )
        auth_url, _ = flow.authorization_url(access_type="offline")

        console.print("Authorize this app by visiting this url:", auth_url, soft_wrap=True)
        code = self._prompt("Enter the code from that page here: ").strip()

        try:
            flow.fetch_token(code=code)
        except (OAuth2Error, requests.RequestException, ValueError) as e:
            raise CredentialsError(f"Error retrieving access token {e}") from e

        creds = flow.credentials
        self._save_token(creds)
        return creds

    def authorize(self, client_config: dict[str, Any]) -> Credentials:
        """Return authorized credentials for the given client config.

        Uses the cached token when possible, refreshing it if it has expired.
        Otherwise runs the interactive flow and caches the result.

        Raises:
            CredentialsError: If the code exchange or the token write fails
        """
        creds = self._load_token()
        if creds is None:
            return self._request_token(client_config)

        if not creds.valid and creds.expired and creds.refresh_token:
            try:
                creds.refresh(Request())
            except RefreshError as e:
                logger.warning("Cached token was rejected (%s), re-authorizing", e)
                return self._request_token(client_config)
            self._save_token(creds)

        return creds

    def load_credentials(self) -> Credentials:
        """Load the client secrets from disk and authorize them."""
        return self.authorize(self.load_client_config())
