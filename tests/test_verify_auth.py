"""Tests for the authorization check script."""

from unittest.mock import patch

import pytest

from docsync.core.auth import CredentialsError
from docsync.core.client import DriveAPIError
from docsync.verify_auth import main

CLIENT_CONFIG = {"installed": {"client_id": "client-123.apps.googleusercontent.com"}}


class TestVerifyAuth:
    """Tests for verify_auth.main."""

    def test_all_checks_pass(self) -> None:
        with patch("docsync.verify_auth.CredentialManager") as manager_cls:
            with patch("docsync.verify_auth.DriveClient") as client_cls:
                manager_cls.return_value.load_client_config.return_value = CLIENT_CONFIG
                client_cls.return_value.verify_connection.return_value = True

                assert main() == 0

        manager_cls.return_value.authorize.assert_called_once_with(CLIENT_CONFIG)

    def test_missing_credentials(self) -> None:
        with patch("docsync.verify_auth.CredentialManager") as manager_cls:
            manager_cls.return_value.load_client_config.side_effect = CredentialsError("missing")

            assert main() == 1

        manager_cls.return_value.authorize.assert_not_called()

    def test_api_unauthorized(self, capsys: pytest.CaptureFixture[str]) -> None:
        with patch("docsync.verify_auth.CredentialManager") as manager_cls:
            with patch("docsync.verify_auth.DriveClient") as client_cls:
                manager_cls.return_value.load_client_config.return_value = CLIENT_CONFIG
                client_cls.return_value.verify_connection.side_effect = DriveAPIError("unauthorized", 401)

                assert main() == 1

        assert "Delete" in capsys.readouterr().out
