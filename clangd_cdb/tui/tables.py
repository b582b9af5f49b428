from rich.markup import escape
from rich.panel import Panel
from rich.table import Column, Table

from clangd_cdb.config.models import Rule, RuleSet
from clangd_cdb.models import CoverageRow, ResolutionRow
from clangd_cdb.tui.enums import RESOLUTION_STATUS_STYLE, UIStyle
from clangd_cdb.tui.sections import styled
from clangd_cdb.utils import compact_home_path


def _patterns_text(patterns) -> str:
    if patterns is None:
        return ""
    return escape(", ".join(pattern.pattern for pattern in patterns))


class RulesTable:
    @staticmethod
    def rules_table(rule_set: RuleSet) -> Table:
        table = Table(
            Column(header="#", width=3, justify="right"),
            Column(header="PathMatch", overflow="fold"),
            Column(header="PathExclude", overflow="fold"),
            Column(header="CompilationDatabase", overflow="ellipsis"),
            expand=True,
            header_style="bold",
        )
        fallback = rule_set.fallback
        for index, rule in enumerate(rule_set, start=1):
            table.add_row(str(index), *RulesTable._rule_cells(rule, is_fallback=rule is fallback))
        return table

    @staticmethod
    def _rule_cells(rule: Rule, is_fallback: bool = False) -> tuple[str, str, str]:
        database = rule.compilation_database
        database_text = escape(database) if database is not None else styled("(unset)", UIStyle.DIM.value)
        if rule.condition is None:
            label = "(fallback)" if is_fallback else "(always)"
            return styled(label, UIStyle.DIM.value), "", database_text
        return (
            _patterns_text(rule.condition.path_match),
            _patterns_text(rule.condition.path_exclude),
            database_text,
        )


class ResolutionTable:
    @staticmethod
    def resolution_table(items: list[ResolutionRow]) -> Table:
        table = Table(
            Column(header="File", overflow="fold"),
            Column(header="Configured", overflow="ellipsis"),
            Column(header="Database", overflow="fold"),
            Column(header="Status", width=10),
            expand=True,
            header_style="bold",
        )
        for item in items:
            style = RESOLUTION_STATUS_STYLE.get(item.status, UIStyle.WHITE.value)
            database = compact_home_path(item.database) if item.database else ""
            table.add_row(
                escape(item.file),
                escape(item.configured or ""),
                escape(database),
                styled(item.status.value, style),
            )
        return table

    @staticmethod
    def coverage_table(items: list[CoverageRow]) -> Table:
        table = Table(
            Column(header="File", overflow="fold"),
            Column(header="Database", overflow="fold"),
            Column(header="Listed", width=8),
            expand=True,
            header_style="bold",
        )
        for item in items:
            style = UIStyle.GREEN.value if item.listed else UIStyle.RED.value
            listed = "yes" if item.listed else "no"
            database = compact_home_path(item.database) if item.database else ""
            table.add_row(escape(item.file), escape(database), styled(listed, style))
        return table

    @staticmethod
    def stats_panel(found: int, missing: int) -> Panel:
        table = Table(show_header=False, box=None)
        table.add_row("[bold]found[/bold]", str(found))
        table.add_row("[bold]missing[/bold]", str(missing))
        return Panel(
            table,
            title="summary",
            border_style=UIStyle.GREEN.value if missing == 0 else UIStyle.RED.value,
        )
