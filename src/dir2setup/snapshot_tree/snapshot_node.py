"""Node types for the directory snapshot tree."""

from typing import Any, Mapping, Optional, Union

from anytree import Node

from dir2setup.types import TreeMapping


class SnapshotNode(Node):  # type: ignore
    """Base class for entries of a snapshot tree.

    Extends anytree.Node so that snapshots get parent/child bookkeeping, path
    lookup and traversal for free. Use DirectoryNode or FileNode; the two are
    distinguished by type, which keeps an empty directory and an empty file apart.

    Attributes:
        name (str): A single path segment, unique among its siblings.
        is_dir (bool): True for directories, False for files.
    """

    is_dir = False

    @property
    def relative_path(self) -> str:
        """Path of this node relative to the snapshot root, using forward slashes.

        Example:
            >>> root = DirectoryNode("project")
            >>> backend = DirectoryNode("backend", parent=root)
            >>> FileNode("server.js", parent=backend, content="").relative_path
            'backend/server.js'
        """
        return "/".join(node.name for node in self.path[1:])


class DirectoryNode(SnapshotNode):
    """A directory in the snapshot; its children are its entries."""

    is_dir = True

    def __init__(self, name: str, parent: Optional["DirectoryNode"] = None, **kwargs: Any) -> None:
        super().__init__(name, parent, **kwargs)


class FileNode(SnapshotNode):
    """A file in the snapshot, holding its full text content.

    Example:
        >>> node = FileNode("package.json", content="{}")
        >>> node.is_dir, node.content
        (False, '{}')
    """

    def __init__(
        self, name: str, parent: Optional[DirectoryNode] = None, content: str = "", **kwargs: Any
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.content = content


def validate_name(name: str) -> str:
    """Check that a snapshot entry name is a single path segment.

    Raises:
        ValueError: If the name is empty, a relative marker, or contains a separator.

    Example:
        >>> validate_name("server.js")
        'server.js'
        >>> validate_name("backend/server.js")
        Traceback (most recent call last):
        ...
        ValueError: Invalid entry name 'backend/server.js': must be a single path segment
    """
    if not isinstance(name, str) or name in ("", ".", "..") or "/" in name or "\\" in name:
        raise ValueError(f"Invalid entry name {name!r}: must be a single path segment")
    return name


def to_mapping(node: DirectoryNode) -> TreeMapping:
    """Convert a directory node into the plain nested mapping form.

    Example:
        >>> root = DirectoryNode("project")
        >>> frontend = DirectoryNode("frontend", parent=root)
        >>> _ = FileNode("package.json", parent=frontend, content="{}")
        >>> to_mapping(root)
        {'frontend': {'package.json': '{}'}}
    """
    mapping: TreeMapping = {}
    for child in node.children:
        if isinstance(child, DirectoryNode):
            mapping[child.name] = to_mapping(child)
        else:
            mapping[child.name] = child.content
    return mapping


def from_mapping(mapping: Mapping[str, Any], name: str = "") -> DirectoryNode:
    """Build a directory node from the nested mapping form.

    Entries are attached in sorted order.

    Raises:
        ValueError: If an entry name is not a single path segment.
        TypeError: If a value is neither a mapping nor a string.

    Example:
        >>> root = from_mapping({"backend": {"server.js": "console.log(1)"}, "README.md": ""})
        >>> [child.name for child in root.children]
        ['README.md', 'backend']
    """
    root = DirectoryNode(name)
    _attach(root, mapping)
    return root


def _attach(parent: DirectoryNode, mapping: Mapping[str, Any]) -> None:
    for key in sorted(mapping):
        value: Union[Mapping[str, Any], str] = mapping[key]
        validate_name(key)
        if isinstance(value, Mapping):
            _attach(DirectoryNode(key, parent=parent), value)
        elif isinstance(value, str):
            FileNode(key, parent=parent, content=value)
        else:
            raise TypeError(f"Entry {key!r} must be a mapping or a string, got {type(value).__name__}")
