"""Map request paths onto files below the SLPK root folder."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from slpkserver.config import SlpkOptions

LOGGER = logging.getLogger(__name__)


def _relative_path(request_path: str) -> str:
    rel_path = request_path[1:] if request_path.startswith("/") else request_path
    if os.sep != "/":
        rel_path = rel_path.replace("/", os.sep)
    return rel_path


def resolve_file_path(request_path: str, options: SlpkOptions) -> Path | None:
    """Return the file that should answer ``request_path``, or ``None``.

    Candidates are checked in a fixed order and the first existing file wins:

    * a directory is answered by the first of ``options.index_files`` inside it;
    * a missing path is retried with each of ``options.extensions`` appended;
    * an existing file is returned unchanged.

    The path is joined to the root folder as given; ``..`` segments are not
    collapsed or rejected here.
    """
    rel_path = _relative_path(request_path)
    if not rel_path:
        return None

    local_path = os.path.join(options.root_folder, rel_path)
    if os.path.isdir(local_path):
        for index_file in options.index_files:
            index_path = os.path.join(local_path, index_file)
            if os.path.isfile(index_path):
                return Path(index_path)
        LOGGER.debug("Directory %s has no index file", local_path)
        return None

    if not os.path.isfile(local_path):
        for ext in options.extensions:
            candidate = local_path + ext
            if os.path.isfile(candidate):
                return Path(candidate)
        return None

    return Path(local_path)
