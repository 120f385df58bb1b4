"""Project snapshot tree with configurable exclusion rules.

This module provides the SnapshotTree class, which walks a project directory,
leaves out excluded paths and records every retained file with its text content.
"""

import logging
import stat
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

from anytree import ContStyle, PreOrderIter, RenderTree

from dir2setup.exceptions import UnreadableFileError
from dir2setup.exclusion_rules.base_rules import BaseExclusionRules
from dir2setup.snapshot_tree.read_error_action import ReadErrorAction
from dir2setup.snapshot_tree.snapshot_node import DirectoryNode, FileNode, to_mapping
from dir2setup.types import PathType, TreeMapping

logger = logging.getLogger(__name__)


class SnapshotTree:
    """A snapshot of a project directory, built once and never modified.

    The tree is built lazily on first access. Directories become DirectoryNode
    entries and regular files become FileNode entries carrying their content,
    decoded as UTF-8 with newlines left untouched so they can be written back
    byte for byte. Entries are recorded in name order.

    Exclusion:
        Each entry's path relative to the root is checked against the exclusion
        rules before anything else is done with it. Excluded directories are
        neither descended into nor recorded. Directories are checked both with
        and without a trailing slash, so a ``dist/`` pattern drops the ``dist``
        directory itself rather than leaving it behind empty.

    Unreadable files:
        Files that cannot be read as UTF-8 text are handled according to
        ``read_error_action``: logged and omitted (WARN, the default), omitted
        (IGNORE) or raised as UnreadableFileError (RAISE). Omitted files are listed
        in ``skipped_files``.

    Listing and stat failures are never recovered: they propagate to the caller.
    Symbolic links and special files are not part of a snapshot.

    Attributes:
        root_path (Path): The directory being captured.
        exclusion_rules (Optional[BaseExclusionRules]): Rules for excluding entries.
        read_error_action (ReadErrorAction): How to handle unreadable files.

    Example:
        >>> tree = SnapshotTree(".")  # doctest: +SKIP
        >>> print(tree.get_tree_representation())  # doctest: +SKIP
        project/
        ├── backend/
        │   └── server.js
        └── frontend/
            └── package.json
    """

    def __init__(
        self,
        root_path: PathType,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        read_error_action: ReadErrorAction = ReadErrorAction.WARN,
    ) -> None:
        self.root_path = Path(root_path)
        self.exclusion_rules = exclusion_rules
        self.read_error_action = read_error_action
        self._tree: Optional[DirectoryNode] = None
        self._skipped_files: List[Tuple[str, str]] = []

    def get_tree(self) -> DirectoryNode:
        """Get the root node of the snapshot, building it on first access.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            OSError: If a directory cannot be listed or an entry cannot be stat'ed.
            UnreadableFileError: If a file cannot be read and read_error_action is RAISE.
        """
        if self._tree is None:
            self._build_tree()
        assert self._tree is not None
        return self._tree

    def _build_tree(self) -> None:
        if not self.root_path.exists():
            raise FileNotFoundError(f"Root path does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            raise NotADirectoryError(f"Root path is not a directory: {self.root_path}")

        self._skipped_files = []
        tree = self.build(self.root_path, self.root_path)
        tree.name = self.root_path.resolve().name
        self._tree = tree

    def build(self, directory: Path, base_directory: Path) -> DirectoryNode:
        """Capture ``directory`` and everything retained below it.

        Paths are made relative to ``base_directory`` before they are checked
        against the exclusion rules; the initial call passes the root for both.

        Args:
            directory: Directory to capture.
            base_directory: Snapshot root that relative paths are computed from.

        Returns:
            A DirectoryNode named after ``directory`` holding its retained entries.
        """
        node = DirectoryNode(directory.name)

        for name in sorted(entry.name for entry in directory.iterdir()):
            entry_path = directory / name
            relative_path = entry_path.relative_to(base_directory).as_posix()
            if self._is_excluded(relative_path):
                continue

            mode = entry_path.lstat().st_mode
            if stat.S_ISDIR(mode):
                if self._is_excluded(relative_path + "/"):
                    continue
                child = self.build(entry_path, base_directory)
                child.parent = node
            elif stat.S_ISREG(mode):
                content = self._read_file(entry_path, relative_path)
                if content is not None:
                    FileNode(name, parent=node, content=content)
            else:
                logger.debug("Skipping %s: not a regular file or directory", relative_path)

        return node

    def _is_excluded(self, relative_path: str) -> bool:
        if self.exclusion_rules is None:
            return False
        return self.exclusion_rules.exclude(relative_path)

    def _read_file(self, path: Path, relative_path: str) -> Optional[str]:
        """Read a file's full text, or return None if it has to be left out."""
        try:
            with open(path, "r", encoding="utf-8", newline="") as file:
                return file.read()
        except (OSError, UnicodeDecodeError) as e:
            if self.read_error_action == ReadErrorAction.RAISE:
                raise UnreadableFileError(str(path), str(e)) from e
            self._skipped_files.append((relative_path, str(e)))
            if self.read_error_action == ReadErrorAction.WARN:
                logger.warning("Cannot read file %s, it will be skipped: %s", path, e)
            return None

    @property
    def skipped_files(self) -> List[Tuple[str, str]]:
        """Files left out because they could not be read, as (relative_path, reason) pairs."""
        self.get_tree()
        return list(self._skipped_files)

    def get_file_count(self) -> int:
        """Number of files in the snapshot."""
        return sum(1 for node in self.get_tree().descendants if not node.is_dir)

    def get_directory_count(self) -> int:
        """Number of directories in the snapshot, excluding the root."""
        return sum(1 for node in self.get_tree().descendants if node.is_dir)

    def get_character_count(self) -> int:
        """Total number of characters across all captured files."""
        return sum(len(content) for _, content in self.iterate_files())

    def iterate_files(self) -> Iterator[Tuple[str, str]]:
        """Iterate over the captured files in tree order.

        Yields:
            Pairs of (relative_path, content) for each file.

        Example:
            >>> tree = SnapshotTree("project")  # doctest: +SKIP
            >>> [path for path, _ in tree.iterate_files()]  # doctest: +SKIP
            ['backend/server.js', 'frontend/package.json']
        """
        for node in PreOrderIter(self.get_tree(), filter_=lambda n: isinstance(n, FileNode)):
            yield node.relative_path, node.content

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate a tree representation of the snapshot one line at a time.

        Directories are listed before files, both alphabetically, and carry a
        trailing slash.
        """

        def ordered(children: Tuple[DirectoryNode, ...]) -> List[DirectoryNode]:
            return sorted(children, key=lambda n: (not n.is_dir, n.name.lower()))

        for prefix, _, node in RenderTree(self.get_tree(), style=ContStyle(), childiter=ordered):
            suffix = "/" if node.is_dir else ""
            yield f"{prefix}{node.name}{suffix}"

    def get_tree_representation(self) -> str:
        """Get the complete tree representation as a string."""
        return "\n".join(self.stream_tree_representation())

    def to_mapping(self) -> TreeMapping:
        """Get the snapshot as a plain nested mapping of names to mappings or text."""
        return to_mapping(self.get_tree())

    def refresh(self) -> None:
        """Discard the cached snapshot and capture the directory again."""
        self._tree = None
        self._skipped_files = []
        self._build_tree()
