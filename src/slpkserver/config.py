"""Application configuration defaults and settings file loading."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

DEFAULT_PATH_BASE = "/slpk"
DEFAULT_ROOT_FOLDER = "slpk"
DEFAULT_INDEX_FILES = ("index.json",)
DEFAULT_EXTENSIONS = (".json", ".bin", ".json.gz", ".bin.gz")
DEFAULT_WEB_ROOT = "wwwroot"


class ConfigError(ValueError):
    """Raised when a settings file cannot be read or validated."""


@dataclass(frozen=True, slots=True)
class SlpkOptions:
    """Where SLPK assets live and how request paths map onto them."""

    path_base: str = DEFAULT_PATH_BASE
    root_folder: Path = Path(DEFAULT_ROOT_FOLDER)
    index_files: tuple[str, ...] = DEFAULT_INDEX_FILES
    extensions: tuple[str, ...] = DEFAULT_EXTENSIONS

    def resolve_root_folder(self, base_dir: Path | None = None) -> Path:
        if Path(self.root_folder).is_absolute() or base_dir is None:
            return Path(self.root_folder)
        return base_dir / self.root_folder


@dataclass(frozen=True, slots=True)
class CorsOptions:
    origins: tuple[str, ...] = ("*",)
    methods: tuple[str, ...] = ("*",)
    headers: tuple[str, ...] = ("*",)
    exposed_headers: tuple[str, ...] = ()
    supports_credentials: bool = False


@dataclass(frozen=True, slots=True)
class AppConfig:
    slpk: SlpkOptions = field(default_factory=SlpkOptions)
    cors: CorsOptions = field(default_factory=CorsOptions)
    web_root: Path | None = Path(DEFAULT_WEB_ROOT)


class _Section(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class SlpkSection(_Section):
    path_base: str = DEFAULT_PATH_BASE
    root_folder: Path = Path(DEFAULT_ROOT_FOLDER)
    index_files: List[str] = list(DEFAULT_INDEX_FILES)
    extensions: List[str] = list(DEFAULT_EXTENSIONS)


class CorsSection(_Section):
    origins: List[str] = ["*"]
    methods: List[str] = ["*"]
    headers: List[str] = ["*"]
    exposed_headers: List[str] = []
    supports_credentials: bool = False


class SettingsFile(_Section):
    slpk: SlpkSection = SlpkSection()
    cors: CorsSection = CorsSection()
    web_root: Path | None = Path(DEFAULT_WEB_ROOT)

    def to_config(self) -> AppConfig:
        return AppConfig(
            slpk=SlpkOptions(
                path_base=self.slpk.path_base,
                root_folder=self.slpk.root_folder,
                index_files=tuple(self.slpk.index_files),
                extensions=tuple(self.slpk.extensions),
            ),
            cors=CorsOptions(
                origins=tuple(self.cors.origins),
                methods=tuple(self.cors.methods),
                headers=tuple(self.cors.headers),
                exposed_headers=tuple(self.cors.exposed_headers),
                supports_credentials=self.cors.supports_credentials,
            ),
            web_root=self.web_root,
        )


def load_config(path: Path) -> AppConfig:
    """Load an ``AppConfig`` from a JSON settings file.

    The file holds a ``slpk`` section and an optional ``cors`` section. Keys
    may be written in camelCase (``rootFolder``) or snake_case
    (``root_folder``); anything missing keeps its default.
    """
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(f"Unable to read settings file {path}: {exc}") from exc

    try:
        settings = SettingsFile.model_validate(raw)
    except ValidationError as exc:
        raise ConfigError(f"Invalid settings file {path}: {exc}") from exc
    return settings.to_config()
