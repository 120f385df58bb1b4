"""Project directory to setup script conversion.

This module provides the Dir2Setup class, which ties a snapshot of a project
directory to an output strategy and writes the resulting setup artifact.
"""

from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

from dir2setup.exceptions import ScriptWriteError
from dir2setup.exclusion_rules.base_rules import BaseExclusionRules
from dir2setup.exclusion_rules.pattern_rules import PatternExclusionRules
from dir2setup.output_strategies import get_strategy
from dir2setup.output_strategies.base_strategy import OutputStrategy
from dir2setup.setup_plan import SetupPlan
from dir2setup.snapshot_tree.read_error_action import ReadErrorAction
from dir2setup.snapshot_tree.snapshot_tree import SnapshotTree
from dir2setup.types import PathType


class Dir2Setup:
    """Snapshot a project directory and generate the script that recreates it.

    The snapshot is taken lazily, on the first access to the tree, a count or the
    rendered artifact, and the rendered artifact is cached.

    Attributes:
        directory (Path): Directory being captured.
        strategy (OutputStrategy): Strategy rendering the artifact.

    Example:
        >>> generator = Dir2Setup(".")  # doctest: +SKIP
        >>> generator.write()  # doctest: +SKIP
        PosixPath('setup-project.py')
        >>> generator.file_count  # doctest: +SKIP
        12

    Raises:
        ValueError: If directory is invalid or the output format is unsupported.
    """

    def __init__(
        self,
        directory: PathType = ".",
        *,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        output_format: Union[str, OutputStrategy] = "python",
        setup_plan: Optional[SetupPlan] = None,
        read_error_action: Union[str, ReadErrorAction] = ReadErrorAction.WARN,
    ):
        """Initialize the generator.

        Args:
            directory: Directory to capture. Defaults to the current directory.
            exclusion_rules: Rules deciding which paths are left out. Defaults to the
                built-in pattern list (dependency folders, VCS metadata, build output,
                local databases, editor settings, generated setup artifacts).
            output_format: "python", "node" or "json", or an OutputStrategy instance.
            setup_plan: Setup steps for the generated script. Ignored when an
                OutputStrategy instance is given.
            read_error_action: How to handle files that cannot be read as text:
                "warn", "ignore" or "raise", or a ReadErrorAction value.

        Raises:
            ValueError: If directory is invalid, the output format is unsupported or
                the read error action is unknown.
        """
        self.directory = Path(directory)
        if not self.directory.is_dir():
            raise ValueError(f"'{directory}' is not a valid directory")

        if isinstance(read_error_action, str):
            try:
                read_error_action = ReadErrorAction(read_error_action.lower())
            except ValueError:
                raise ValueError(
                    f"Invalid read_error_action: {read_error_action}. " "Must be one of: 'warn', 'ignore', 'raise'"
                )

        if exclusion_rules is None:
            exclusion_rules = PatternExclusionRules()

        if isinstance(output_format, OutputStrategy):
            self.strategy = output_format
        else:
            self.strategy = get_strategy(output_format, setup_plan)

        self._tree = SnapshotTree(self.directory, exclusion_rules, read_error_action=read_error_action)
        self._rendered: Optional[str] = None

    @property
    def tree(self) -> SnapshotTree:
        return self._tree

    @property
    def file_count(self) -> int:
        """Number of files captured."""
        return self._tree.get_file_count()

    @property
    def directory_count(self) -> int:
        """Number of directories captured, excluding the root."""
        return self._tree.get_directory_count()

    @property
    def character_count(self) -> int:
        """Total number of characters across captured files."""
        return self._tree.get_character_count()

    @property
    def skipped_files(self) -> List[Tuple[str, str]]:
        """Files left out because they could not be read, as (relative_path, reason) pairs."""
        return self._tree.skipped_files

    @property
    def default_output_path(self) -> Path:
        """Well-known output file name of the strategy, relative to the current directory."""
        return Path(self.strategy.get_default_filename())

    def stream_tree(self) -> Iterator[str]:
        """Stream the tree representation of the snapshot line by line."""
        yield from self._tree.stream_tree_representation()

    def render(self) -> str:
        """Render the setup artifact for the snapshot.

        Raises:
            OSError: If the directory cannot be listed while taking the snapshot.
            UnreadableFileError: If a file cannot be read and read_error_action is RAISE.
        """
        if self._rendered is None:
            self._rendered = self.strategy.emit(self._tree.get_tree())
        return self._rendered

    def write(self, output_path: Optional[PathType] = None) -> Path:
        """Render the artifact and write it, replacing any previous version.

        Args:
            output_path: Destination file. Defaults to ``default_output_path``.

        Returns:
            The path written to.

        Raises:
            ScriptWriteError: If the file cannot be written.
        """
        content = self.render()
        path = Path(output_path) if output_path is not None else self.default_output_path
        try:
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
        except OSError as e:
            raise ScriptWriteError(str(path), e.strerror or str(e)) from e
        except UnicodeEncodeError as e:
            raise ScriptWriteError(str(path), str(e)) from e
        return path
