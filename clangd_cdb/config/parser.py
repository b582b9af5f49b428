"""Parse and serialize the ``.clangd`` rule dialect.

Only a narrow, line-oriented subset of the clangd config format is understood:

    If:
      PathMatch: [.*\\.h$, .*\\.hpp$]
      PathExclude: pch\\.h$
    CompileFlags:
      CompilationDatabase: build/headers
    ---
    CompileFlags:
      CompilationDatabase: Ancestors

Everything else (comments, anchors, nested mappings, other keys) is skipped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

import yaml

from clangd_cdb.config.models import Condition, Rule, RuleSet
from clangd_cdb.errors import ConfigUnreadableError, InvalidPatternError

logger = logging.getLogger(__name__)

_DEFAULT_SOURCE = "<config>"

_DATABASE_RE = re.compile(r"^\s+CompilationDatabase:\s*(.*)$")
_PATH_MATCH_RE = re.compile(r"^\s+PathMatch:\s*(.*)$")
_PATH_EXCLUDE_RE = re.compile(r"^\s+PathExclude:\s*(.*)$")


class BlockId(str, Enum):
    NONE = ""
    IF = "If:"
    COMPILE_FLAGS = "CompileFlags:"
    BLOCK_END = "---"


@dataclass
class _RuleBuilder:
    source: str
    has_condition: bool = False
    path_match: Optional[tuple[re.Pattern[str], ...]] = None
    path_exclude: Optional[tuple[re.Pattern[str], ...]] = None
    compilation_database: Optional[str] = None

    def set_path_match(self, value: str) -> None:
        self.has_condition = True
        self.path_match = _compile_patterns(value, self.source)

    def set_path_exclude(self, value: str) -> None:
        self.has_condition = True
        self.path_exclude = _compile_patterns(value, self.source)

    def build(self) -> Rule:
        condition = None
        if self.has_condition:
            condition = Condition(path_match=self.path_match, path_exclude=self.path_exclude)
        return Rule(condition=condition, compilation_database=self.compilation_database)


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


def _split_patterns(value: str) -> list[str]:
    if not value.startswith("["):
        return [value]
    inner = value[1:-1] if value.endswith("]") else value[1:]
    return [item.strip() for item in inner.split(",") if item.strip()]


def _compile_patterns(value: str, source: str) -> tuple[re.Pattern[str], ...]:
    patterns: list[re.Pattern[str]] = []
    for raw in _split_patterns(value.strip()):
        try:
            patterns.append(re.compile(raw))
        except re.error as exc:
            raise InvalidPatternError(path=source, pattern=raw, detail=str(exc)) from exc
    return tuple(patterns)


def order_rules(rules: list[Rule]) -> RuleSet:
    conditioned = [rule for rule in rules if rule.is_conditional]
    unconditioned = [rule for rule in rules if not rule.is_conditional]
    if len(unconditioned) > 1:
        logger.debug("Ignoring %d extra unconditional rule(s)", len(unconditioned) - 1)
    return RuleSet(rules=tuple(conditioned + unconditioned[:1]))


def parse_config(text: str, *, source: str | Path | None = None) -> RuleSet:
    source_name = str(source) if source is not None else _DEFAULT_SOURCE
    rules: list[Rule] = []
    block = BlockId.NONE
    builder: Optional[_RuleBuilder] = None

    for line in text.splitlines():
        if line.startswith(BlockId.COMPILE_FLAGS.value):
            block = BlockId.COMPILE_FLAGS
            continue
        if line.startswith(BlockId.IF.value):
            block = BlockId.IF
            continue
        if line.strip() == BlockId.BLOCK_END.value:
            if builder is not None:
                rules.append(builder.build())
            block = BlockId.NONE
            builder = None
            continue

        if block == BlockId.COMPILE_FLAGS:
            match = _DATABASE_RE.match(line)
            if match:
                if builder is None:
                    builder = _RuleBuilder(source=source_name)
                builder.compilation_database = _strip_quotes(match.group(1).strip())
            continue

        if block == BlockId.IF:
            match = _PATH_MATCH_RE.match(line)
            if match:
                if builder is None:
                    builder = _RuleBuilder(source=source_name)
                builder.set_path_match(match.group(1))
                continue
            match = _PATH_EXCLUDE_RE.match(line)
            if match:
                if builder is None:
                    builder = _RuleBuilder(source=source_name)
                builder.set_path_exclude(match.group(1))

    if builder is not None:
        rules.append(builder.build())

    return order_rules(rules)


def load_config(path: Path) -> RuleSet:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ConfigUnreadableError(path=path, detail="not found") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigUnreadableError(path=path, detail=str(exc)) from exc
    return parse_config(text, source=path)


def _rule_to_dict(rule: Rule) -> dict:
    doc: dict = {}
    if rule.condition is not None:
        condition: dict = {}
        if rule.condition.path_match is not None:
            condition["PathMatch"] = [pattern.pattern for pattern in rule.condition.path_match]
        if rule.condition.path_exclude is not None:
            condition["PathExclude"] = [pattern.pattern for pattern in rule.condition.path_exclude]
        doc["If"] = condition
    flags: dict = {}
    if rule.compilation_database is not None:
        flags["CompilationDatabase"] = rule.compilation_database
    doc["CompileFlags"] = flags
    return doc


def serialize_rule_set(rule_set: RuleSet) -> str:
    if not len(rule_set):
        return ""
    return yaml.dump_all(
        [_rule_to_dict(rule) for rule in rule_set],
        default_flow_style=False,
        sort_keys=False,
        explicit_start=True,
    )
