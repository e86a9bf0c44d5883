"""Request handling entry point for SLPK assets."""

from __future__ import annotations

import logging

from starlette.responses import Response

from slpkserver.config import SlpkOptions
from slpkserver.models import ResolvedFile
from slpkserver.serving.resolver import resolve_file_path
from slpkserver.serving.responses import build_response, error_response, not_found_response

LOGGER = logging.getLogger(__name__)


class SlpkHandler:
    """Turns a request path below the mount point into a response."""

    def __init__(self, options: SlpkOptions) -> None:
        self.options = options

    async def handle(self, request_path: str, if_none_match: str | None = None) -> Response | None:
        """Answer ``request_path`` or return ``None`` to let the next handler run.

        Only an empty path is delegated. Every other request gets a
        response, with unexpected faults reported as a 500 carrying the
        error message.
        """
        if not request_path:
            return None
        try:
            return await self._handle(request_path, if_none_match)
        except Exception as exc:
            LOGGER.exception("Handle %s error.", request_path)
            return error_response(exc)

    async def _handle(self, request_path: str, if_none_match: str | None) -> Response:
        LOGGER.info("Request path %s", request_path)
        file_path = resolve_file_path(request_path, self.options)
        if file_path is None:
            LOGGER.warning("No file found for request %s!", request_path)
            return not_found_response()

        LOGGER.info("File path is: %s", file_path)
        resolved = ResolvedFile.from_path(file_path)
        return await build_response(resolved, if_none_match)
