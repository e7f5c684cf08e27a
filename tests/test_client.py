"""Tests for the Drive client."""

from pathlib import Path
from unittest.mock import MagicMock, Mock, patch

import httplib2
import pytest
from googleapiclient.errors import HttpError

from docsync.core.client import AmbiguousDocumentError, DriveAPIError, DriveClient
from docsync.models.config import DriveSettings


def make_client(files: list[dict[str, str]] | None = None) -> tuple[DriveClient, MagicMock]:
    service = MagicMock()
    service.files.return_value.list.return_value.execute.return_value = {"files": files or []}
    service.files.return_value.create.return_value.execute.return_value = {"id": "new-id"}
    service.files.return_value.update.return_value.execute.return_value = {"id": "existing-id"}
    return DriveClient(service=service), service


@pytest.fixture
def odt_file(tmp_path: Path) -> Path:
    path = tmp_path / "notes.odt"
    path.write_bytes(b"PK\x03\x04 fake odt")
    return path


class TestGetFileIds:
    """Tests for name lookup."""

    def test_query_parameters(self) -> None:
        client, service = make_client()

        client.get_file_ids("Notes")

        service.files.return_value.list.assert_called_once_with(
            pageSize=30,
            fields="nextPageToken, files(id, name)",
            q="name = 'Notes'",
        )

    def test_page_size_from_settings(self) -> None:
        service = MagicMock()
        service.files.return_value.list.return_value.execute.return_value = {}
        client = DriveClient(service=service, settings=DriveSettings(page_size=5))

        assert client.get_file_ids("Notes") == []
        assert service.files.return_value.list.call_args.kwargs["pageSize"] == 5

    def test_filters_exact_name(self) -> None:
        client, _ = make_client([
            {"id": "1", "name": "Notes"},
            {"id": "2", "name": "notes"},
            {"id": "3", "name": "Notes (copy)"},
        ])

        assert client.get_file_ids("Notes") == ["1"]

    def test_build_name_query_escapes(self) -> None:
        assert DriveClient.build_name_query("Bob's notes") == "name = 'Bob\\'s notes'"
        assert DriveClient.build_name_query("a\\b") == "name = 'a\\\\b'"

    def test_http_error_wrapped(self) -> None:
        client, service = make_client()
        resp = Mock(status=403, reason="Forbidden")
        service.files.return_value.list.return_value.execute.side_effect = HttpError(
            resp, b'{"error": {"message": "denied"}}'
        )

        with pytest.raises(DriveAPIError, match="The API returned an error") as exc_info:
            client.get_file_ids("Notes")

        assert exc_info.value.status_code == 403

    def test_transport_error_wrapped(self) -> None:
        client, service = make_client()
        service.files.return_value.list.return_value.execute.side_effect = ConnectionResetError("reset")

        with pytest.raises(DriveAPIError, match="Request failed"):
            client.get_file_ids("Notes")

    def test_httplib2_error_wrapped(self) -> None:
        client, service = make_client()
        service.files.return_value.list.return_value.execute.side_effect = httplib2.ServerNotFoundError(
            "Unable to find the server at www.googleapis.com"
        )

        with pytest.raises(DriveAPIError, match="Request failed") as exc_info:
            client.get_file_ids("Notes")

        assert exc_info.value.status_code is None


class TestUpdateDocument:
    """Tests for the create / replace / refuse decision."""

    def test_no_match_creates(self, odt_file: Path) -> None:
        client, service = make_client([])

        file_id = client.update_document("Notes", odt_file)

        assert file_id == "new-id"
        files = service.files.return_value
        files.update.assert_not_called()
        kwargs = files.create.call_args.kwargs
        assert kwargs["body"] == {"name": "Notes", "mimeType": "application/vnd.google-apps.document"}
        assert kwargs["media_body"].mimetype() == "application/vnd.oasis.opendocument.text"
        assert kwargs["fields"] == "id"

    def test_one_match_replaces(self, odt_file: Path) -> None:
        client, service = make_client([{"id": "existing-id", "name": "Notes"}])

        file_id = client.update_document("Notes", odt_file)

        assert file_id == "existing-id"
        files = service.files.return_value
        files.create.assert_not_called()
        kwargs = files.update.call_args.kwargs
        assert kwargs["fileId"] == "existing-id"
        assert kwargs["body"]["name"] == "Notes"
        assert kwargs["media_body"].mimetype() == "application/vnd.oasis.opendocument.text"

    def test_multiple_matches_refused(self, odt_file: Path) -> None:
        client, service = make_client([
            {"id": "a", "name": "Notes"},
            {"id": "b", "name": "Notes"},
        ])

        with pytest.raises(AmbiguousDocumentError, match="more than one version of document exists: Notes") as exc_info:
            client.update_document("Notes", odt_file)

        assert exc_info.value.file_ids == ["a", "b"]
        files = service.files.return_value
        files.create.assert_not_called()
        files.update.assert_not_called()


class TestDriveClient:
    """Tests for client construction and health check."""

    def test_builds_service_from_credentials(self) -> None:
        creds = Mock()

        with patch("docsync.core.client.build") as build:
            client = DriveClient(credentials=creds)

        build.assert_called_once_with("drive", "v3", credentials=creds, cache_discovery=False)
        assert client.service is build.return_value

    def test_verify_connection(self) -> None:
        client, service = make_client()
        service.about.return_value.get.return_value.execute.return_value = {
            "user": {"emailAddress": "me@example.com"}
        }

        assert client.verify_connection() is True
        service.about.return_value.get.assert_called_once_with(fields="user")
