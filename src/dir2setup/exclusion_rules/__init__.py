"""Exclusion rules for filtering files and directories out of a snapshot."""

from .base_rules import BaseExclusionRules
from .composite_rules import CompositeExclusionRules
from .git_rules import GitIgnoreExclusionRules
from .pattern_rules import DEFAULT_EXCLUDE_PATTERNS, PatternExclusionRules

__all__ = [
    "BaseExclusionRules",
    "CompositeExclusionRules",
    "DEFAULT_EXCLUDE_PATTERNS",
    "GitIgnoreExclusionRules",
    "PatternExclusionRules",
]
