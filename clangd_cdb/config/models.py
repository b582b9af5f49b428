"""Rule data models and rule matching."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Iterator, Optional, Union

logger = logging.getLogger(__name__)

PathLike = Union[str, "os.PathLike[str]"]


def _any_match(patterns: tuple[re.Pattern[str], ...], text: str) -> bool:
    return any(pattern.search(text) for pattern in patterns)


@dataclass(frozen=True)
class Condition:
    path_match: Optional[tuple[re.Pattern[str], ...]] = None
    path_exclude: Optional[tuple[re.Pattern[str], ...]] = None

    def matches(self, file_path: str) -> bool:
        if self.path_match is not None and not _any_match(self.path_match, file_path):
            return False
        if self.path_exclude is not None and _any_match(self.path_exclude, file_path):
            return False
        return True


@dataclass(frozen=True)
class Rule:
    condition: Optional[Condition] = None
    compilation_database: Optional[str] = None

    @property
    def is_conditional(self) -> bool:
        return self.condition is not None

    def applies_to(self, file_path: str) -> bool:
        return self.condition is None or self.condition.matches(file_path)


@dataclass(frozen=True)
class RuleSet:
    """Rules in precedence order: conditioned rules first, at most one fallback last."""

    rules: tuple[Rule, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    @property
    def fallback(self) -> Optional[Rule]:
        if self.rules and not self.rules[-1].is_conditional:
            return self.rules[-1]
        return None

    def select(self, file_path: PathLike) -> Optional[Rule]:
        text = os.fspath(file_path)
        for index, rule in enumerate(self.rules):
            if rule.applies_to(text):
                logger.debug("Rule #%d selected for %s", index, text)
                return rule
        return None


def get_compilation_database(rule_set: RuleSet, file_path: PathLike) -> Optional[str]:
    """Return the ``CompilationDatabase`` value of the first rule matching ``file_path``.

    A selected rule without a value stops the lookup and yields ``None``; later
    rules are never consulted.
    """
    rule = rule_set.select(file_path)
    if rule is None:
        return None
    return rule.compilation_database
