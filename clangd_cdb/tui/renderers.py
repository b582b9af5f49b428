from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from clangd_cdb.config.models import RuleSet
from clangd_cdb.models import CoverageRow, ResolutionRow, ResolutionStatus
from clangd_cdb.tui.enums import SectionStyle
from clangd_cdb.tui.sections import UISection
from clangd_cdb.tui.tables import ResolutionTable, RulesTable
from clangd_cdb.utils import compact_home_path


class ResolverConsoleUI:
    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render_project(self, project_root: Path, config_path: Path, has_config: bool) -> None:
        table = Table.grid(padding=(0, 2))
        table.add_column(style="bold")
        table.add_column()
        table.add_row("Project", escape(compact_home_path(project_root)))
        table.add_row("Config", escape(compact_home_path(config_path)) if has_config else "(none)")
        self.console.print(UISection.wrap("project", table, style=SectionStyle.PROJECT))

    def render_config_error(self, error: Optional[Exception]) -> None:
        if error is None:
            return
        self.console.print(
            UISection.message(
                "config error",
                str(error),
                style=SectionStyle.ERROR,
                hint="Falling back to directory search.",
            )
        )

    def render_rules(self, rule_set: Optional[RuleSet]) -> None:
        if rule_set is None or not len(rule_set):
            self.console.print(
                UISection.message("rules", "No rules configured.", style=SectionStyle.WARNING)
            )
            return
        self.console.print(
            UISection.wrap(
                "rules",
                RulesTable.rules_table(rule_set),
                style=SectionStyle.RULES,
                subtitle="first match wins",
            )
        )

    def render_resolution(self, rows: list[ResolutionRow]) -> None:
        self.console.print(
            UISection.wrap(
                "compilation databases",
                ResolutionTable.resolution_table(rows),
                style=SectionStyle.DATABASES,
            )
        )
        found = sum(1 for row in rows if row.status == ResolutionStatus.FOUND)
        self.console.print(ResolutionTable.stats_panel(found=found, missing=len(rows) - found))

    def render_coverage(self, rows: list[CoverageRow]) -> None:
        self.console.print(
            UISection.wrap(
                "coverage",
                ResolutionTable.coverage_table(rows),
                style=SectionStyle.COVERAGE,
            )
        )
        listed = sum(1 for row in rows if row.listed)
        self.console.print(ResolutionTable.stats_panel(found=listed, missing=len(rows) - listed))
