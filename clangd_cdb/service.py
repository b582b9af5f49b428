from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

from clangd_cdb.config.models import PathLike, RuleSet, get_compilation_database
from clangd_cdb.config.repository import ConfigRepository
from clangd_cdb.errors import MalformedConfigError
from clangd_cdb.resolver import ResolverState, find_compile_commands

logger = logging.getLogger(__name__)


class CompileCommandsService:
    """Resolves compilation databases for files of the active project.

    Owns the project's ``ResolverState``. The config file is reloaded through
    ``reload_config`` and dropped through ``clear_config``; a failed reload
    leaves no rule set active. Rule set swaps and resolutions hold ``_lock``,
    so a resolution sees either the old rule set or the new one.
    """

    def __init__(self, project_root: Path, config_path: Path | None = None) -> None:
        self._lock = threading.Lock()
        self._state: Optional[ResolverState] = None
        self._repository: Optional[ConfigRepository] = None
        self.last_error: Optional[MalformedConfigError] = None
        self.project_generation = 0
        self.change_project_path(project_root, config_path=config_path)

    @property
    def state(self) -> Optional[ResolverState]:
        return self._state

    @property
    def repository(self) -> Optional[ConfigRepository]:
        return self._repository

    @property
    def project_root(self) -> Optional[Path]:
        return self._state.project_root if self._state is not None else None

    @property
    def rule_set(self) -> Optional[RuleSet]:
        return self._state.rule_set if self._state is not None else None

    def dispose(self) -> None:
        with self._lock:
            if self._state is not None:
                self._state.clear()
            self._state = None
            self._repository = None
            self.last_error = None

    def change_project_path(self, project_root: Path, config_path: Path | None = None) -> None:
        self.dispose()
        root = project_root.expanduser().resolve()
        with self._lock:
            self._state = ResolverState(project_root=root)
            self._repository = ConfigRepository(root, config_path=config_path)
            self.project_generation += 1
        logger.info("Active project: %s", root)
        if self._repository.has_config():
            self.reload_config()

    def reload_config(self, path: Path | None = None) -> bool:
        state, repository = self._state, self._repository
        if state is None or repository is None:
            return False
        config_path = path or repository.config_path
        try:
            rule_set = repository.load(config_path)
        except MalformedConfigError as exc:
            with self._lock:
                state.clear()
                self.last_error = exc
            logger.warning("Failed to parse configuration file at %s: %s", config_path, exc)
            return False
        with self._lock:
            state.replace_rule_set(rule_set)
            self.last_error = None
        logger.info("Loaded %d rule(s) from %s", len(rule_set), config_path)
        return True

    def clear_config(self) -> None:
        with self._lock:
            if self._state is None:
                return
            self._state.clear()
            self.last_error = None
            root = self._state.project_root
        logger.info("Configuration cleared for %s", root)

    def get_compilation_database(self, file_path: PathLike) -> Optional[str]:
        rule_set = self.rule_set
        if rule_set is None:
            return None
        return get_compilation_database(rule_set, file_path)

    def find_compile_commands(self, file_path: PathLike) -> Optional[Path]:
        with self._lock:
            if self._state is None:
                return None
            return find_compile_commands(self._state, file_path)
