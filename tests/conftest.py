import sys
import json
from pathlib import Path
from typing import Any

from click.testing import CliRunner
import pytest


def _ensure_repo_on_path() -> None:
    repo_root = Path(__file__).resolve().parent.parent
    if str(repo_root) not in sys.path:
        sys.path.insert(0, str(repo_root))


_ensure_repo_on_path()


ROUTING_CONFIG = (
    "If:\n"
    "  PathMatch: [\\.inl$, \\.inc$]\n"
    "CompileFlags:\n"
    "  CompilationDatabase: /database/for/inlines\n"
    "---\n"
    "If:\n"
    "  PathMatch: [\\.h$, \\.hh$, \\.hpp$, \\.hxx$]\n"
    "  PathExclude: [pch\\.h$]\n"
    "CompileFlags:\n"
    "  CompilationDatabase: /database/for/headers\n"
    "---\n"
    "CompileFlags:\n"
    "  CompilationDatabase: /database/for/sources\n"
)


@pytest.fixture
def routing_config() -> str:
    return ROUTING_CONFIG


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    root = tmp_path.resolve() / "workspace" / "project"
    root.mkdir(parents=True)
    return root


@pytest.fixture
def write_config(project_root: Path):
    def _write(text: str, path: Path | None = None) -> Path:
        target = path or project_root / ".clangd"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(text, encoding="utf-8")
        return target

    return _write


@pytest.fixture
def write_database():
    def _write(path: Path, entries: list[Any] | None = None) -> Path:
        if path.name != "compile_commands.json":
            path = path / "compile_commands.json"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(entries or []), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cli_runner() -> CliRunner:
    class WideCliRunner(CliRunner):
        def invoke(self, cli: Any, args: Any = None, **kwargs: Any):  # type: ignore[override]
            env = dict(kwargs.pop("env", {}) or {})
            env.setdefault("COLUMNS", "400")
            kwargs["env"] = env
            return super().invoke(cli, args=args, **kwargs)

    return WideCliRunner()
