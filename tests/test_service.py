"""Tests for CompileCommandsService."""

import logging
from pathlib import Path

from clangd_cdb.errors import ConfigUnreadableError, InvalidPatternError
from clangd_cdb.service import CompileCommandsService


def test_loads_project_config_on_construction(project_root: Path, write_config, routing_config: str) -> None:
    write_config(routing_config)
    service = CompileCommandsService(project_root)

    assert service.rule_set is not None
    assert len(service.rule_set) == 3
    assert service.last_error is None
    assert service.get_compilation_database("src/file.inl") == "/database/for/inlines"


def test_without_config_has_no_rules(project_root: Path) -> None:
    service = CompileCommandsService(project_root)
    assert service.rule_set is None
    assert service.get_compilation_database("main.cpp") is None


def test_database_in_project_root(project_root: Path, write_database) -> None:
    database = write_database(project_root)
    service = CompileCommandsService(project_root)
    assert service.find_compile_commands("main.cpp") == database


def test_database_in_build_dir(project_root: Path, write_database) -> None:
    database = write_database(project_root / "build")
    service = CompileCommandsService(project_root)
    assert service.find_compile_commands("main.cpp") == database


def test_ancestor_search(project_root: Path, write_config, write_database) -> None:
    database = write_database(project_root.parent.parent / "build")
    write_config("CompileFlags:\n  CompilationDatabase: ancestors\n")
    service = CompileCommandsService(project_root)
    assert service.find_compile_commands("main.cpp") == database


def test_no_database_anywhere(project_root: Path, write_database) -> None:
    write_database(project_root.parent)
    service = CompileCommandsService(project_root)
    assert service.find_compile_commands("main.cpp") is None


def test_none_value_ignores_existing_database(project_root: Path, write_config, write_database) -> None:
    write_database(project_root)
    write_config("CompileFlags:\n  CompilationDatabase: None\n")
    service = CompileCommandsService(project_root)
    assert service.find_compile_commands("main.cpp") is None


def test_reload_replaces_rules(project_root: Path, write_config, write_database) -> None:
    write_database(project_root)
    config = write_config("CompileFlags:\n  CompilationDatabase: none\n")
    service = CompileCommandsService(project_root)
    assert service.find_compile_commands("main.cpp") is None

    write_config("CompileFlags:\n  CompilationDatabase: .\n")
    assert service.reload_config(config) is True

    assert service.get_compilation_database("main.cpp") == "."
    assert service.find_compile_commands("main.cpp") == project_root / "compile_commands.json"


def test_failed_reload_discards_previous_rules(
    project_root: Path, write_config, write_database, caplog
) -> None:
    database = write_database(project_root)
    write_config("CompileFlags:\n  CompilationDatabase: none\n")
    service = CompileCommandsService(project_root)
    service.find_compile_commands("main.cpp")

    write_config("If:\n  PathMatch: (broken\nCompileFlags:\n  CompilationDatabase: none\n")
    with caplog.at_level(logging.WARNING, logger="clangd_cdb.service"):
        assert service.reload_config() is False

    assert service.rule_set is None
    assert service.state.compilation_database is None
    assert isinstance(service.last_error, InvalidPatternError)
    assert "Failed to parse configuration file" in caplog.text
    assert service.find_compile_commands("main.cpp") == database


def test_reload_missing_file_records_error(project_root: Path) -> None:
    service = CompileCommandsService(project_root)
    assert service.reload_config(project_root / "missing.yaml") is False
    assert isinstance(service.last_error, ConfigUnreadableError)
    assert service.rule_set is None


def test_successful_reload_clears_last_error(project_root: Path, write_config) -> None:
    write_config("If:\n  PathMatch: (broken\n")
    service = CompileCommandsService(project_root)
    assert service.last_error is not None

    write_config("CompileFlags:\n  CompilationDatabase: build\n")
    assert service.reload_config() is True
    assert service.last_error is None


def test_clear_config(project_root: Path, write_config, write_database) -> None:
    database = write_database(project_root)
    write_config("CompileFlags:\n  CompilationDatabase: none\n")
    service = CompileCommandsService(project_root)
    assert service.find_compile_commands("main.cpp") is None

    service.clear_config()

    assert service.rule_set is None
    assert service.find_compile_commands("main.cpp") == database


def test_dispose(project_root: Path, write_config, write_database) -> None:
    write_database(project_root)
    write_config("CompileFlags:\n  CompilationDatabase: .\n")
    service = CompileCommandsService(project_root)

    service.dispose()

    assert service.state is None
    assert service.project_root is None
    assert service.rule_set is None
    assert service.find_compile_commands("main.cpp") is None
    assert service.get_compilation_database("main.cpp") is None
    assert service.reload_config() is False


def test_change_project_path(tmp_path: Path, project_root: Path, write_config, write_database) -> None:
    write_config("CompileFlags:\n  CompilationDatabase: none\n")
    other = tmp_path.resolve() / "other"
    database = write_database(other / "build")
    service = CompileCommandsService(project_root)

    service.change_project_path(other)

    assert service.project_root == other
    assert service.rule_set is None
    assert service.find_compile_commands("main.cpp") == database


def test_explicit_config_path(project_root: Path, write_config, write_database) -> None:
    write_database(project_root)
    config = write_config(
        "CompileFlags:\n  CompilationDatabase: none\n",
        path=project_root / "configs" / "clangd.yaml",
    )
    service = CompileCommandsService(project_root, config_path=config)

    assert service.repository.config_path == config
    assert service.find_compile_commands("main.cpp") is None


def test_get_compilation_database_is_idempotent(project_root: Path, write_config, routing_config: str) -> None:
    write_config(routing_config)
    service = CompileCommandsService(project_root)

    first = service.get_compilation_database("include/pch.h")
    second = service.get_compilation_database("include/pch.h")

    assert first == second == "/database/for/sources"
    assert service.state.compilation_database is None


def test_independent_services(tmp_path: Path, write_database) -> None:
    first_root = tmp_path.resolve() / "first"
    second_root = tmp_path.resolve() / "second"
    first_db = write_database(first_root)
    write_database(second_root)
    (second_root / ".clangd").write_text("CompileFlags:\n  CompilationDatabase: none\n", encoding="utf-8")

    first = CompileCommandsService(first_root)
    second = CompileCommandsService(second_root)

    assert second.find_compile_commands("main.cpp") is None
    assert first.find_compile_commands("main.cpp") == first_db


def test_resolution_during_reload_sees_previous_rules(
    project_root: Path, write_config, write_database, monkeypatch
) -> None:
    write_database(project_root)
    write_config("CompileFlags:\n  CompilationDatabase: None\n")
    service = CompileCommandsService(project_root)
    repository = service.repository
    original_load = repository.load
    seen = []

    def load_and_resolve(path=None):
        seen.append(service.find_compile_commands("main.cpp"))
        return original_load(path)

    monkeypatch.setattr(repository, "load", load_and_resolve)

    assert service.reload_config() is True
    assert seen == [None]
    assert service.find_compile_commands("main.cpp") is None


def test_change_project_path_bumps_generation(project_root: Path) -> None:
    service = CompileCommandsService(project_root)
    generation = service.project_generation
    service.change_project_path(project_root)
    assert service.project_generation == generation + 1
