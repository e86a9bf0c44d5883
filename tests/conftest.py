"""Shared fixtures."""

from __future__ import annotations

import gzip
from pathlib import Path

import pytest

from slpkserver.config import SlpkOptions


@pytest.fixture
def slpk_root(tmp_path: Path) -> Path:
    """A small extracted scene layer package."""
    root = tmp_path / "slpk"
    layer = root / "layers" / "0"
    (layer / "nodes" / "root").mkdir(parents=True)
    (layer / "nodes" / "1" / "geometries").mkdir(parents=True)
    (layer / "empty").mkdir()

    (layer / "index.json").write_text('{"id": 0, "layerType": "3DObject"}')
    (layer / "nodes" / "root" / "index.json").write_text('{"id": "root"}')
    (layer / "nodes" / "1" / "index.json.gz").write_bytes(gzip.compress(b'{"id": "1"}'))
    (layer / "nodes" / "1" / "geometries" / "0.bin").write_bytes(b"\x00\x01\x02\x03\xff")
    (layer / "nodes" / "1" / "geometries" / "1.bin.gz").write_bytes(gzip.compress(b"\x10\x20"))
    (layer / "nodes" / "1" / "features.json").write_text('{"featureData": []}')
    (layer / "readme.txt").write_text("plain text")
    (tmp_path / "secret.json").write_text('{"secret": true}')
    return root


@pytest.fixture
def slpk_options(slpk_root: Path) -> SlpkOptions:
    return SlpkOptions(
        path_base="/slpk",
        root_folder=slpk_root,
        index_files=("index.json",),
        extensions=(".json", ".bin", ".json.gz", ".bin.gz"),
    )
