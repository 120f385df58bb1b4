"""Output strategy base class defining the interface for setup artifact generation.

This module provides the abstract base class that turns a project snapshot into
the text of an output artifact, usually a setup script that recreates the project
when run.
"""

from abc import ABC, abstractmethod
from typing import Any, Mapping, Optional, Union

from dir2setup.setup_plan import SetupPlan
from dir2setup.snapshot_tree.snapshot_node import DirectoryNode, from_mapping, to_mapping
from dir2setup.types import TreeMapping


class OutputStrategy(ABC):
    """Abstract base class for turning a snapshot into an output artifact.

    Strategies receive the snapshot as a plain nested mapping whose keys are single
    path segments and whose values are nested mappings (directories) or strings
    (file contents). ``emit`` accepts either that mapping or the root DirectoryNode
    of a snapshot tree and validates mappings before rendering.

    Attributes:
        setup_plan (SetupPlan): Setup steps the generated artifact runs, if any.

    Example:
        >>> class ListingStrategy(OutputStrategy):
        ...     def render(self, structure):
        ...         return "\\n".join(sorted(structure)) + "\\n"
        ...
        ...     def get_default_filename(self) -> str:
        ...         return "listing.txt"
        >>> ListingStrategy().emit({"backend": {}, "README.md": ""})
        'README.md\\nbackend\\n'
    """

    def __init__(self, setup_plan: Optional[SetupPlan] = None) -> None:
        self.setup_plan = setup_plan if setup_plan is not None else SetupPlan()

    def emit(self, tree: Union[DirectoryNode, Mapping[str, Any]]) -> str:
        """Render a snapshot into the complete text of the output artifact.

        Args:
            tree: Root node of a snapshot tree, or its nested mapping form.

        Returns:
            The artifact text.

        Raises:
            ValueError: If an entry name is not a single path segment.
            TypeError: If a mapping value is neither a mapping nor a string.
        """
        if isinstance(tree, DirectoryNode):
            structure = to_mapping(tree)
        else:
            structure = to_mapping(from_mapping(tree))
        return self.render(structure)

    @abstractmethod
    def render(self, structure: TreeMapping) -> str:
        """Render a validated snapshot mapping.

        Args:
            structure: Nested mapping of names to mappings (directories) or text (files).

        Returns:
            The artifact text.
        """
        pass

    @abstractmethod
    def get_default_filename(self) -> str:
        """Get the file name the artifact is written to when no output path is given."""
        pass

    def get_file_extension(self) -> str:
        """Get the file extension of the artifact, including the leading dot."""
        filename = self.get_default_filename()
        return filename[filename.rfind(".") :] if "." in filename else ""  # noqa: E203
