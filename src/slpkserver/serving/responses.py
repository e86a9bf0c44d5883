"""Build HTTP responses for resolved SLPK files."""

from __future__ import annotations

import asyncio
from pathlib import Path

from starlette.responses import PlainTextResponse, Response

from slpkserver.models import PayloadKind, ResolvedFile
from slpkserver.utils.files import etag_for, read_bytes, read_text

JSON_MEDIA_TYPE = "application/json"
BINARY_MEDIA_TYPE = "application/octet-stream"


def classify_payload(path: Path) -> PayloadKind:
    name = Path(path).name.lower()
    if name.endswith(".gz"):
        return PayloadKind.GZIP
    if name.endswith(".json"):
        return PayloadKind.JSON
    if name.endswith(".bin"):
        return PayloadKind.BINARY
    return PayloadKind.UNCLASSIFIED


def _gzip_media_type(path: Path) -> str:
    if Path(path).name.lower().endswith(".json.gz"):
        return JSON_MEDIA_TYPE
    return BINARY_MEDIA_TYPE


def _empty_response(status_code: int) -> Response:
    response = Response(status_code=status_code)
    # Empty answers carry no framing headers of their own.
    if "content-length" in response.headers:
        del response.headers["content-length"]
    return response


def not_found_response() -> Response:
    return _empty_response(404)


def not_modified_response() -> Response:
    return _empty_response(304)


def error_response(exc: BaseException) -> Response:
    """Expose the raw error message to the client."""
    return PlainTextResponse(str(exc), status_code=500)


async def build_response(resolved: ResolvedFile, if_none_match: str | None) -> Response:
    """Answer a request for ``resolved``.

    When ``if_none_match`` equals the file's validator the result is a bare
    304. Otherwise the whole file is read into memory and returned with
    ``Cache-Control: no-cache`` and the validator as ``ETag``. The suffix
    decides ``Content-Type``/``Content-Encoding``; files with an unknown
    suffix get the common headers and no body.
    """
    etag = etag_for(resolved.mtime_ns)
    if if_none_match is not None and if_none_match == etag:
        return not_modified_response()

    headers = {
        "Content-Length": str(resolved.size),
        "Cache-Control": "no-cache",
        "ETag": etag,
    }
    kind = classify_payload(resolved.path)
    media_type: str | None = None
    body = b""

    if kind is PayloadKind.GZIP:
        media_type = _gzip_media_type(resolved.path)
        headers["Content-Encoding"] = "gzip"
        body = await asyncio.to_thread(read_bytes, resolved.path)
    elif kind is PayloadKind.JSON:
        media_type = JSON_MEDIA_TYPE
        text = await asyncio.to_thread(read_text, resolved.path)
        body = text.encode("utf-8")
    elif kind is PayloadKind.BINARY:
        media_type = BINARY_MEDIA_TYPE
        body = await asyncio.to_thread(read_bytes, resolved.path)

    return Response(content=body, status_code=200, headers=headers, media_type=media_type)
