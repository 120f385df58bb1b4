"""Exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import PathSpec

from dir2setup.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Additional exclusions written in .gitignore syntax.

    These rules complement the fixed pattern list with anything the project's own
    ignore files already describe (``*.log``, ``coverage/``, negations with ``!``).
    Matching is delegated to the pathspec library so that paths are judged the way
    Git judges them.

    Rules are kept in the order they were added; later rules can override earlier
    ones through negation.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("*.log")
        >>> rules.add_rule("!keep.log")
        >>> rules.exclude("backend/server.log"), rules.exclude("keep.log")
        (True, False)
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        self._lines: List[str] = []
        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, path: str) -> bool:
        """Check if a path matches the loaded patterns.

        Args:
            path: Path relative to the snapshot root, using forward slashes. Directory
                paths should carry a trailing slash for directory-only patterns to match.

        Returns:
            True if the last matching pattern excludes the path.
        """
        return self.spec.match_file(path)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Append the patterns found in one or more ignore files.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")
            with open(path, "r", encoding="utf-8") as f:
                self._lines.extend(f.read().splitlines())

        self._compile()

    def add_rule(self, rule: str) -> None:
        """Append a single .gitignore pattern (e.g. ``"*.pyc"``, ``"coverage/"``)."""
        self._lines.append(rule)
        self._compile()

    def has_rules(self) -> bool:
        return any(line.strip() and not line.startswith("#") for line in self._lines)

    def _compile(self) -> None:
        self.spec = PathSpec.from_lines("gitwildmatch", self._lines)
