"""Index of the files listed in compilation databases."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from jsonschema import Draft7Validator

from clangd_cdb.config.models import PathLike
from clangd_cdb.errors import InvalidCompilationDatabaseError
from clangd_cdb.service import CompileCommandsService
from clangd_cdb.utils import absolute_under, read_json

logger = logging.getLogger(__name__)

ENTRY_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["directory", "file"],
    "properties": {
        "directory": {"type": "string"},
        "file": {"type": "string"},
        "command": {"type": "string"},
        "arguments": {"type": "array", "items": {"type": "string"}},
        "output": {"type": "string"},
    },
    "anyOf": [{"required": ["command"]}, {"required": ["arguments"]}],
}

_ENTRY_VALIDATOR = Draft7Validator(ENTRY_SCHEMA)


def load_entries(path: Path) -> list[dict[str, Any]]:
    try:
        payload = read_json(path)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidCompilationDatabaseError(path, str(exc)) from exc
    if not isinstance(payload, list):
        raise InvalidCompilationDatabaseError(path, "expected a JSON array")

    entries: list[dict[str, Any]] = []
    for index, entry in enumerate(payload):
        error = next(iter(_ENTRY_VALIDATOR.iter_errors(entry)), None)
        if error is not None:
            logger.debug("Skipping entry #%d of %s: %s", index, path, error.message)
            continue
        entries.append(entry)
    return entries


def entry_file(entry: dict[str, Any]) -> str:
    return str(absolute_under(entry["file"], Path(entry["directory"])))


class CompilationDatabaseIndex:
    def __init__(self, service: CompileCommandsService) -> None:
        self._service = service
        self._files_by_database: dict[Path, frozenset[str]] = {}
        self._project_generation = service.project_generation

    def clear(self) -> None:
        self._files_by_database.clear()
        self._project_generation = self._service.project_generation

    def files_in(self, database: Path) -> frozenset[str]:
        if self._project_generation != self._service.project_generation:
            self.clear()
        cached = self._files_by_database.get(database)
        if cached is not None:
            return cached
        try:
            files = frozenset(entry_file(entry) for entry in load_entries(database))
        except InvalidCompilationDatabaseError as exc:
            logger.warning("%s", exc)
            files = frozenset()
        self._files_by_database[database] = files
        return files

    def contains(self, file_path: PathLike) -> bool:
        database = self._service.find_compile_commands(file_path)
        if database is None:
            return False
        candidate = os.fspath(file_path)
        root = self._service.project_root
        if root is not None:
            candidate = str(absolute_under(candidate, root))
        return candidate in self.files_in(database)
