"""Composite exclusion rules for combining multiple rule types."""

from typing import List, Sequence

from .base_rules import BaseExclusionRules


class CompositeExclusionRules(BaseExclusionRules):
    """Exclusion rules that exclude a path when ANY constituent rule does.

    Used to put the fixed pattern list and user-supplied .gitignore-style rules
    behind a single ``exclude`` call.

    Attributes:
        rules (List[BaseExclusionRules]): Constituent rules, evaluated in order.

    Example:
        >>> from dir2setup.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> from dir2setup.exclusion_rules.pattern_rules import PatternExclusionRules
        >>> git_rules = GitIgnoreExclusionRules()
        >>> git_rules.add_rule("*.log")
        >>> composite = CompositeExclusionRules([PatternExclusionRules(["node_modules"]), git_rules])
        >>> composite.exclude("node_modules/a.js"), composite.exclude("app.log"), composite.exclude("app.js")
        (True, True, False)
    """

    def __init__(self, rules: Sequence[BaseExclusionRules]):
        """Initialize composite exclusion rules.

        Raises:
            ValueError: If no rules are given.
            TypeError: If any rule doesn't implement BaseExclusionRules.
        """
        if not rules:
            raise ValueError("At least one exclusion rule must be provided")

        for i, rule in enumerate(rules):
            if not isinstance(rule, BaseExclusionRules):
                raise TypeError(f"Rule at index {i} must implement BaseExclusionRules, " f"got {type(rule)}")

        self.rules: List[BaseExclusionRules] = list(rules)

    def exclude(self, path: str) -> bool:
        return any(rule.exclude(path) for rule in self.rules)

    def has_rules(self) -> bool:
        return any(rule.has_rules() for rule in self.rules)

    def get_rules(self) -> List[BaseExclusionRules]:
        """Return a copy of the constituent rules list."""
        return list(self.rules)
