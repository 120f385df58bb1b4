"""Fixed-list exclusion rules for project snapshots."""

from typing import Iterable, List, Tuple

from .base_rules import BaseExclusionRules

# Paths left out of a project snapshot unless the caller supplies its own list:
# installed dependencies, VCS metadata, build output, local databases, editor
# settings and the generated artifacts themselves.
DEFAULT_EXCLUDE_PATTERNS: Tuple[str, ...] = (
    "node_modules",
    ".git",
    "setup-project.js",
    "setup-project.py",
    "project-structure.json",
    "generate-setup.js",
    "database",
    "dist",
    "build",
    ".env",
    ".gitignore",
    ".idea",
    ".vscode",
    "backend/database",
    "backend/node_modules",
    "backend/package-lock.json",
    "frontend/node_modules",
    "frontend/package-lock.json",
)


def normalize_path(path: str) -> str:
    """Convert a path to the forward-slash form used for matching.

    Example:
        >>> normalize_path("backend\\\\src\\\\app.js")
        'backend/src/app.js'
        >>> normalize_path("./frontend/package.json")
        'frontend/package.json'
    """
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized


class PatternExclusionRules(BaseExclusionRules):
    """Exclusion rules built from a static list of names and path prefixes.

    Each pattern is one of:

    - a bare name (no slash), which excludes any path having a segment equal to it,
      so ``node_modules`` excludes ``node_modules/x.txt`` and
      ``frontend/node_modules/y.txt`` but not ``my_node_modules_backup/z.txt``;
    - a path ending in a slash, which excludes the path itself and everything below it;
    - a path containing a slash, which excludes any path starting with it.

    Any pattern also excludes a path exactly equal to it. Patterns and paths are
    compared after converting backslashes to forward slashes.

    Prefix matching for slash-containing patterns is literal by default, so
    ``backend/db`` also excludes ``backend/database``. Pass ``segment_aware=True``
    to only match whole segments.

    The pattern list is frozen at construction; ``with_patterns`` returns a new
    rule set with additional patterns.

    Attributes:
        patterns (Tuple[str, ...]): The normalized patterns, in the order given.
        segment_aware (bool): Whether prefix matches must end at a segment boundary.

    Example:
        >>> rules = PatternExclusionRules(["node_modules", "backend/db", "dist/"])
        >>> rules.exclude("node_modules/x.txt")
        True
        >>> rules.exclude("my_node_modules_backup/z.txt")
        False
        >>> rules.exclude("backend/database/schema.sql")
        True
        >>> PatternExclusionRules(["backend/db"], segment_aware=True).exclude("backend/database")
        False
        >>> rules.exclude("dist/app.js")
        True
    """

    def __init__(self, patterns: Iterable[str] = DEFAULT_EXCLUDE_PATTERNS, segment_aware: bool = False) -> None:
        self._patterns: Tuple[str, ...] = tuple(n for n in map(normalize_path, patterns) if n)
        self._segment_aware = segment_aware

    @property
    def patterns(self) -> Tuple[str, ...]:
        return self._patterns

    @property
    def segment_aware(self) -> bool:
        return self._segment_aware

    def exclude(self, path: str) -> bool:
        """Check whether a relative path matches any pattern.

        Args:
            path: Path relative to the snapshot root, with either separator.

        Returns:
            True if any pattern matches, False otherwise.
        """
        normalized = normalize_path(path)
        segments = normalized.split("/")
        return any(self._matches(pattern, normalized, segments) for pattern in self._patterns)

    def _matches(self, pattern: str, path: str, segments: List[str]) -> bool:
        if path == pattern:
            return True
        if pattern.endswith("/"):
            return path.startswith(pattern)
        if "/" in pattern:
            if self._segment_aware:
                return path.startswith(pattern + "/")
            return path.startswith(pattern)
        return pattern in segments

    def has_rules(self) -> bool:
        return bool(self._patterns)

    def with_patterns(self, *patterns: str) -> "PatternExclusionRules":
        """Return a new rule set with ``patterns`` appended.

        Example:
            >>> base = PatternExclusionRules(["node_modules"])
            >>> extended = base.with_patterns("coverage")
            >>> extended.exclude("coverage/index.html"), base.exclude("coverage/index.html")
            (True, False)
        """
        return PatternExclusionRules(self._patterns + patterns, segment_aware=self._segment_aware)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({list(self._patterns)!r}, segment_aware={self._segment_aware})"
