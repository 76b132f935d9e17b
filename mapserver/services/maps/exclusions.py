"""Denylist of decorative / non-interactive element identifiers.

The rule set is loaded once per process and never mutated.
"""

import json
import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, ValidationError

from mapserver.config import settings
from mapserver.exceptions import ExclusionConfigError

logger = logging.getLogger(__name__)


# Built-in rules for the venue floor plans
DEFAULT_EXACT = (
    "Layer_1",
    "background",
    "outline",
    "walls",
    "labels",
)
DEFAULT_PREFIXES = (
    "Vector",
    "Group",
    "Frame",
    "decor_",
)
DEFAULT_PATTERNS = (
    r"^vector_",
    r"^STAIRS",
    r"^ELEVATOR",
    r"^_x3",
    r"^(path|rect|circle|ellipse|line|polyline|polygon)\d+$",
    r"^\d+$",
)


@dataclass(frozen=True)
class ExclusionRuleSet:
    """Exact names, prefixes and regex patterns of identifiers to suppress."""

    exact: frozenset[str] = frozenset()
    prefixes: tuple[str, ...] = ()
    patterns: tuple[re.Pattern, ...] = ()

    def is_excluded(self, identifier: str) -> bool:
        """True if the identifier matches any exact name, prefix or pattern."""
        if identifier in self.exact:
            return True
        if self.prefixes and identifier.startswith(self.prefixes):
            return True
        return any(pattern.search(identifier) for pattern in self.patterns)


class ExclusionRulesConfig(BaseModel):
    """On-disk shape of an exclusion rules file."""

    exact: list[str] = []
    prefixes: list[str] = []
    patterns: list[str] = []


def build_rule_set(
    exact: list[str] | tuple[str, ...] = (),
    prefixes: list[str] | tuple[str, ...] = (),
    patterns: list[str] | tuple[str, ...] = (),
) -> ExclusionRuleSet:
    """Compile raw rule strings into an ExclusionRuleSet."""
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern))
        except re.error as e:
            raise ExclusionConfigError(f"Invalid exclusion pattern {pattern!r}: {e}") from e

    return ExclusionRuleSet(
        exact=frozenset(exact),
        prefixes=tuple(prefixes),
        patterns=tuple(compiled),
    )


def load_rule_set(path: str | Path) -> ExclusionRuleSet:
    """Load rules from a JSON file with `exact`, `prefixes` and `patterns` lists."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
        config = ExclusionRulesConfig.model_validate(raw)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise ExclusionConfigError(f"Cannot load exclusion rules from {path}: {e}") from e

    return build_rule_set(config.exact, config.prefixes, config.patterns)


@lru_cache
def get_exclusion_rules() -> ExclusionRuleSet:
    """Process-wide rule set: the configured file if set, else the built-in rules."""
    if settings.exclusion_rules_file:
        rules = load_rule_set(settings.exclusion_rules_file)
        logger.info(f"Loaded exclusion rules from {settings.exclusion_rules_file}")
    else:
        rules = build_rule_set(DEFAULT_EXACT, DEFAULT_PREFIXES, DEFAULT_PATTERNS)

    logger.info(
        f"Exclusion rules: {len(rules.exact)} exact, "
        f"{len(rules.prefixes)} prefixes, {len(rules.patterns)} patterns"
    )
    return rules
