"""
Ordered pattern tables shared by the field extractors.

Each extractor owns a list of ``PatternRule`` objects and walks it with
``first_match``; the first candidate that survives the rule's transform and
validator wins.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatternRule:
    """One step of an extraction cascade.

    Attributes:
        label: Short name used in debug logs.
        pattern: Compiled regex; every match is a candidate.
        group: Group holding the value (name, index, or 0 for the whole match).
        scope: Narrows the text before searching (e.g. the first 500 chars).
        transform: Cleans a raw candidate before validation.
        validator: Rejects candidates that matched the shape but not the meaning.
    """

    label: str
    pattern: "re.Pattern[str]"
    group: Union[int, str] = 0
    scope: Optional[Callable[[str], str]] = None
    transform: Optional[Callable[[str], str]] = None
    validator: Optional[Callable[[str], bool]] = None

    def candidates(self, text: str) -> Iterable[str]:
        target = self.scope(text) if self.scope else text
        for m in self.pattern.finditer(target):
            value = m.group(self.group)
            if not value:
                continue
            value = value.strip()
            if self.transform:
                value = self.transform(value)
            if value and (self.validator is None or self.validator(value)):
                yield value


def first_match(rules: Iterable[PatternRule], text: str, default: str = "") -> str:
    """Return the first validated candidate across ``rules``, else ``default``."""
    for rule in rules:
        for value in rule.candidates(text):
            logger.debug("rule %s matched %r", rule.label, value)
            return value
    return default


def head(n: int) -> Callable[[str], str]:
    """Scope helper: the first ``n`` characters."""

    def _head(text: str) -> str:
        return text[:n]

    return _head


def first_lines(n: int) -> Callable[[str], str]:
    """Scope helper: the first ``n`` non-blank lines."""

    def _first_lines(text: str) -> str:
        lines = [ln for ln in text.splitlines() if ln.strip()]
        return "\n".join(lines[:n])

    return _first_lines
