"""ASGI middleware that serves SLPK assets under a URL prefix."""

from __future__ import annotations

import logging

from starlette.datastructures import Headers
from starlette.types import ASGIApp, Receive, Scope, Send

from slpkserver.config import SlpkOptions
from slpkserver.serving.handler import SlpkHandler

LOGGER = logging.getLogger(__name__)


def _normalize_path_base(path_base: str) -> str:
    path_base = path_base.strip()
    if not path_base or path_base == "/":
        return ""
    if not path_base.startswith("/"):
        path_base = "/" + path_base
    return path_base.rstrip("/")


def split_path_base(path: str, path_base: str) -> str | None:
    """Return the part of ``path`` below ``path_base``.

    ``None`` means the request is outside the prefix. The match is
    case-insensitive and stops at segment boundaries, so ``/slpkx`` is not
    below ``/slpk``.
    """
    if not path_base:
        return path
    if not path.lower().startswith(path_base.lower()):
        return None
    remainder = path[len(path_base):]
    if remainder and not remainder.startswith("/"):
        return None
    return remainder


class SlpkMiddleware:
    """Answer requests below ``options.path_base`` from the SLPK root folder.

    Requests outside the prefix, the bare prefix itself and any path listed in
    ``passthrough`` go on to the wrapped application.
    """

    def __init__(
        self, app: ASGIApp, options: SlpkOptions, passthrough: tuple[str, ...] = ()
    ) -> None:
        self.app = app
        self.options = options
        self.passthrough = frozenset(passthrough)
        self.path_base = _normalize_path_base(options.path_base)
        self.handler = SlpkHandler(options)
        LOGGER.info("Slpk: %s => %s", options.path_base, options.root_folder)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or scope["path"] in self.passthrough:
            await self.app(scope, receive, send)
            return

        request_path = split_path_base(scope["path"], self.path_base)
        if request_path is None:
            await self.app(scope, receive, send)
            return

        if_none_match = Headers(scope=scope).get("if-none-match")
        response = await self.handler.handle(request_path, if_none_match)
        if response is None:
            await self.app(scope, receive, send)
            return
        await response(scope, receive, send)
