"""Tests for SlpkHandler."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from slpkserver.config import SlpkOptions
from slpkserver.serving.handler import SlpkHandler
from slpkserver.utils.files import etag_for


def _handle(handler: SlpkHandler, path: str, if_none_match: str | None = None):
    return asyncio.run(handler.handle(path, if_none_match))


class TestSlpkHandler:
    """Tests for SlpkHandler.handle."""

    def test_empty_path_is_delegated(self, slpk_options: SlpkOptions) -> None:
        """Returns None so the next handler can run."""
        assert _handle(SlpkHandler(slpk_options), "") is None

    def test_root_path_not_found(self, slpk_options: SlpkOptions) -> None:
        """A bare slash is handled and not found."""
        response = _handle(SlpkHandler(slpk_options), "/")

        assert response is not None
        assert response.status_code == 404

    def test_not_found(self, slpk_options: SlpkOptions, caplog: pytest.LogCaptureFixture) -> None:
        """Unresolved path yields 404 and a warning."""
        with caplog.at_level(logging.INFO, logger="slpkserver"):
            response = _handle(SlpkHandler(slpk_options), "/layers/0/nodes/99")

        assert response.status_code == 404
        assert "No file found for request /layers/0/nodes/99!" in caplog.text

    def test_serves_resolved_file(self, slpk_root: Path, slpk_options: SlpkOptions) -> None:
        """Resolved file is returned with a validator."""
        target = slpk_root / "layers" / "0" / "nodes" / "1" / "geometries" / "0.bin"

        response = _handle(SlpkHandler(slpk_options), "/layers/0/nodes/1/geometries/0")

        assert response.status_code == 200
        assert response.body == target.read_bytes()
        assert response.headers["etag"] == etag_for(target.stat().st_mtime_ns)

    def test_not_modified(self, slpk_root: Path, slpk_options: SlpkOptions) -> None:
        """Matching validator yields 304."""
        target = slpk_root / "layers" / "0" / "index.json"
        etag = etag_for(target.stat().st_mtime_ns)

        response = _handle(SlpkHandler(slpk_options), "/layers/0", etag)

        assert response.status_code == 304

    def test_unexpected_error_becomes_500(
        self, slpk_options: SlpkOptions, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Faults are logged once and returned with their message."""
        with patch(
            "slpkserver.serving.handler.resolve_file_path",
            side_effect=PermissionError("Permission denied: 'layers'"),
        ):
            with caplog.at_level(logging.ERROR, logger="slpkserver"):
                response = _handle(SlpkHandler(slpk_options), "/layers/0")

        assert response.status_code == 500
        assert response.body == b"Permission denied: 'layers'"
        errors = [record for record in caplog.records if record.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "Handle /layers/0 error." in errors[0].getMessage()
        assert errors[0].exc_info is not None

    def test_read_error_becomes_500(self, slpk_root: Path, slpk_options: SlpkOptions) -> None:
        """A file that cannot be decoded yields 500 with the decode message."""
        (slpk_root / "layers" / "0" / "broken.json").write_bytes(b"\xff\xfe\xfa")

        response = _handle(SlpkHandler(slpk_options), "/layers/0/broken")

        assert response.status_code == 500
        assert b"utf-8" in response.body

    def test_file_vanishing_before_stat_becomes_500(self, slpk_options: SlpkOptions, tmp_path: Path) -> None:
        """A file removed between resolution and stat yields 500."""
        missing = tmp_path / "gone.bin"
        with patch("slpkserver.serving.handler.resolve_file_path", return_value=missing):
            response = _handle(SlpkHandler(slpk_options), "/gone")

        assert response.status_code == 500
        assert str(missing) in response.body.decode()

    def test_cancelled_read_propagates(self, slpk_options: SlpkOptions) -> None:
        """Cancellation is not turned into a 500."""
        with patch(
            "slpkserver.serving.handler.build_response",
            side_effect=asyncio.CancelledError(),
        ):
            with pytest.raises(asyncio.CancelledError):
                _handle(SlpkHandler(slpk_options), "/layers/0")
