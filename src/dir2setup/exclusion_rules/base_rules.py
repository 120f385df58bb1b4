from abc import ABC, abstractmethod
from typing import Sequence, Union

from dir2setup.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for snapshot exclusion rules.

    Concrete rule sets decide whether a path, given relative to the snapshot root
    and using forward slashes, is left out of the snapshot. Loading rules from
    files and adding single rules are optional capabilities that depend on the
    rule type.

    Example:
        >>> from dir2setup.exclusion_rules.pattern_rules import PatternExclusionRules
        >>> rules = PatternExclusionRules(["node_modules", "backend/database"])
        >>> rules.exclude("frontend/node_modules/vue/index.js")
        True
        >>> rules.exclude("frontend/src/main.js")
        False
        >>> rules.add_rule("*.log")  # doctest: +IGNORE_EXCEPTION_DETAIL
        Traceback (most recent call last):
        NotImplementedError: PatternExclusionRules doesn't support adding individual rules.
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded from the snapshot.

        Args:
            path (str): Path of the file or directory relative to the snapshot root.

        Returns:
            bool: True if the path should be excluded, False if it should be kept.
        """
        pass

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load exclusion rules from one or more files.

        Rule types without file support keep this default, which raises.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule.

        Rule types that are immutable once built keep this default, which raises.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")

    def has_rules(self) -> bool:
        """Whether any rule is configured. Rule sets that cannot be empty keep this default."""
        return True
