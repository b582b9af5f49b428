"""Locate the ``compile_commands.json`` that governs a source file."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from clangd_cdb.config.models import PathLike, RuleSet, get_compilation_database
from clangd_cdb.constants import (
    ANCESTORS_TOKEN,
    BUILD_DIRNAME,
    COMPILE_COMMANDS_FILENAME,
    NONE_TOKEN,
)
from clangd_cdb.utils import absolute_under, path_exists

logger = logging.getLogger(__name__)


def is_none_value(value: Optional[str]) -> bool:
    return value is not None and value.lower() == NONE_TOKEN


def is_ancestors_value(value: Optional[str]) -> bool:
    return value is not None and value.lower() == ANCESTORS_TOKEN


@dataclass
class ResolverState:
    """Per-project resolution context.

    ``compilation_database`` caches the raw value picked by the latest rule
    evaluation. It is dropped whenever ``rule_set`` is replaced.
    """

    project_root: Path
    rule_set: Optional[RuleSet] = None
    compilation_database: Optional[str] = None

    def replace_rule_set(self, rule_set: Optional[RuleSet]) -> None:
        self.rule_set = rule_set
        self.compilation_database = None

    def clear(self) -> None:
        self.replace_rule_set(None)


def search_compile_commands(search_path: Path, ancestors: bool = False) -> Optional[Path]:
    current = Path(os.path.normpath(search_path))
    if current.name == COMPILE_COMMANDS_FILENAME:
        return current if path_exists(current) else None

    while True:
        for candidate in (
            current / COMPILE_COMMANDS_FILENAME,
            current / BUILD_DIRNAME / COMPILE_COMMANDS_FILENAME,
        ):
            logger.debug("Probing %s", candidate)
            if path_exists(candidate):
                return candidate

        if not ancestors:
            return None

        parent = current.parent
        if parent == current:
            return None
        current = parent


def find_compile_commands(state: ResolverState, file_path: PathLike) -> Optional[Path]:
    if state.rule_set is not None:
        state.compilation_database = get_compilation_database(state.rule_set, file_path)

    value = state.compilation_database
    if is_none_value(value):
        logger.debug("Compilation database disabled for %s", os.fspath(file_path))
        return None

    if value is not None and not is_ancestors_value(value):
        return search_compile_commands(absolute_under(value, state.project_root))

    return search_compile_commands(state.project_root, ancestors=is_ancestors_value(value))
