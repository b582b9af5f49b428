import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import click
from rich.console import Console

from clangd_cdb.config.parser import serialize_rule_set
from clangd_cdb.constants import PROJECT_ENVVAR
from clangd_cdb.errors import CdbError
from clangd_cdb.models import ResolutionStatus
from clangd_cdb.service import CompileCommandsService
from clangd_cdb.status import ResolutionReportService
from clangd_cdb.tui import ResolverConsoleUI


def _files_argument():
    return click.argument("files", nargs=-1, required=True)


def _json_option():
    return click.option("--json", "as_json", is_flag=True, help="Print the rows as JSON.")


def _echo_rows(rows: List[Any]) -> None:
    click.echo(json.dumps([row.as_dict() for row in rows], indent=2))


def _service_from_obj(obj: Dict[str, Any]) -> CompileCommandsService:
    project: Path = obj["project"]
    config: Optional[Path] = obj.get("config")
    try:
        return CompileCommandsService(project, config_path=config)
    except CdbError as exc:
        raise click.ClickException(str(exc))
    except Exception as exc:
        raise click.ClickException(f"Fatal: {exc}")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "-p",
    "--project",
    type=click.Path(file_okay=False, path_type=Path),
    default=".",
    show_default=True,
    envvar=PROJECT_ENVVAR,
    help="Project root directory.",
)
@click.option(
    "-c",
    "--config",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Config file to use instead of <project>/.clangd.",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def cli(ctx: click.Context, project: Path, config: Optional[Path], verbose: bool) -> None:
    """Resolve which compile_commands.json governs each source file."""
    _configure_logging(verbose)
    ctx.obj = {"project": project, "config": config}


@cli.command(help="Show the compilation database chosen for each file.")
@_files_argument()
@_json_option()
@click.pass_obj
def resolve(obj: Dict[str, Any], files: tuple[str, ...], as_json: bool) -> None:
    service = _service_from_obj(obj)
    rows = ResolutionReportService(service).build_resolution(list(files))
    if as_json:
        _echo_rows(rows)
    else:
        ui = ResolverConsoleUI(Console())
        ui.render_config_error(service.last_error)
        ui.render_resolution(rows)

    if any(row.status != ResolutionStatus.FOUND for row in rows):
        raise click.exceptions.Exit(1)


@cli.command(help="List the parsed rules in precedence order.")
@click.option("--yaml", "as_yaml", is_flag=True, help="Print the rules as YAML documents.")
@click.pass_obj
def rules(obj: Dict[str, Any], as_yaml: bool) -> None:
    service = _service_from_obj(obj)
    if as_yaml:
        if service.last_error is not None:
            raise click.ClickException(str(service.last_error))
        if service.rule_set is not None:
            click.echo(serialize_rule_set(service.rule_set), nl=False)
        return

    ui = ResolverConsoleUI(Console())
    repository = service.repository
    if repository is not None:
        ui.render_project(repository.root, repository.config_path, repository.has_config())
    ui.render_config_error(service.last_error)
    ui.render_rules(service.rule_set)


@cli.command(help="Check whether files are listed in their compilation database.")
@_files_argument()
@_json_option()
@click.pass_obj
def covered(obj: Dict[str, Any], files: tuple[str, ...], as_json: bool) -> None:
    service = _service_from_obj(obj)
    rows = ResolutionReportService(service).build_coverage(list(files))
    if as_json:
        _echo_rows(rows)
    else:
        ui = ResolverConsoleUI(Console())
        ui.render_config_error(service.last_error)
        ui.render_coverage(rows)

    if not all(row.listed for row in rows):
        raise click.exceptions.Exit(1)


def main() -> int:
    try:
        cli(standalone_mode=False)
    except click.exceptions.Exit as exc:
        code = exc.exit_code
        return code if isinstance(code, int) else 1
    except click.ClickException as exc:
        exc.show()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
