"""Repository for the project-level ``.clangd`` file."""

from __future__ import annotations

from pathlib import Path

from clangd_cdb.config.models import RuleSet
from clangd_cdb.config.parser import load_config
from clangd_cdb.constants import CONFIG_FILENAME


class ConfigRepository:
    def __init__(self, root: Path, config_path: Path | None = None) -> None:
        self._root = root
        self._config_path = config_path or root / CONFIG_FILENAME

    @property
    def root(self) -> Path:
        return self._root

    @property
    def config_path(self) -> Path:
        return self._config_path

    def has_config(self) -> bool:
        return self._config_path.is_file()

    def is_config_path(self, path: str | Path) -> bool:
        return Path(path).resolve() == self._config_path.resolve()

    def load(self, path: Path | None = None) -> RuleSet:
        return load_config(path or self._config_path)
