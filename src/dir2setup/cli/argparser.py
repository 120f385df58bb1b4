"""Command-line argument parsing for dir2setup.

This module defines the command-line interface for dir2setup,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from dir2setup import __version__
from dir2setup.exclusion_rules.base_rules import BaseExclusionRules
from dir2setup.output_strategies import STRATEGIES


def create_exclusion_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create a custom action class that feeds extra exclusions into a rule set.

    Ignore files (-e) and single patterns (-i) are applied in the order they
    appear on the command line, so negations in later options can override
    earlier ones.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return
            if option_string in ("-e", "--exclude-from"):
                try:
                    exclusion_rules.load_rules(Path(str(values)))
                except FileNotFoundError as e:
                    parser.error(str(e))
            else:
                exclusion_rules.add_rule(str(values))

            collected = getattr(namespace, self.dest, None) or []
            collected.append(values)
            setattr(namespace, self.dest, collected)

    return ExclusionRulesAction


def create_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: Rule set collecting the extra -i/-e exclusions.

    Returns:
        An ArgumentParser instance configured with dir2setup's options.
    """
    description = """
    dir2setup: turn a project directory into a single self-contained setup script.

    The directory is captured with dependency folders, VCS metadata, build output,
    local databases and editor settings left out. The generated script, run with no
    arguments in an empty directory, recreates every captured file, installs backend
    and frontend dependencies and runs the backend seed script if there is one.
    """

    epilog = """
    Examples:
      # Capture the current directory into ./setup-project.py
      dir2setup

      # Capture another directory and choose the output file
      dir2setup ~/projects/shop -o shop-setup.py

      # Generate a Node.js setup script instead
      dir2setup -f node

      # Leave out more paths with gitignore-style patterns or ignore files
      dir2setup -i "*.log" -i "coverage/" -e .dockerignore

      # Only treat "backend/db" as excluding "backend/db/...", not "backend/database"
      dir2setup --segment-aware

      # Stop on the first file that cannot be read as text
      dir2setup -R fail

      # Show what was captured
      dir2setup --tree --summary
    """

    parser = argparse.ArgumentParser(
        prog="dir2setup",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"dir2setup {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument(
        "directory",
        type=Path,
        nargs="?",
        default=Path("."),
        help="The project directory to capture (default: the current directory).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help=(
            "Output file path. Defaults to setup-project.py, setup-project.js or "
            "project-structure.json in the current directory, depending on --format."
        ),
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=list(STRATEGIES),
        default="python",
        help="Kind of artifact to generate (default: python).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        type=str,
        metavar="PATTERN",
        action=ExclusionAction,
        dest="ignore",
        help="Additional gitignore-style pattern to exclude (can be specified multiple times).",
    )
    parser.add_argument(
        "-e",
        "--exclude-from",
        type=Path,
        metavar="FILE",
        action=ExclusionAction,
        dest="ignore",
        help="Ignore file (e.g. .gitignore) with additional patterns to exclude (can be specified multiple times).",
    )
    parser.add_argument(
        "--segment-aware",
        action="store_true",
        help="Match path patterns such as backend/db only at path segment boundaries.",
    )
    parser.add_argument(
        "-R",
        "--read-error-action",
        choices=["warn", "ignore", "fail"],
        default="warn",
        help="How to handle files that cannot be read as UTF-8 text (default: warn).",
    )
    parser.add_argument(
        "-t",
        "--tree",
        action="store_true",
        help="Print the captured tree.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        action="store_true",
        help="Print a summary of what was captured.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log skipped entries and other details.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments beyond what argparse handles.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if not args.directory.is_dir():
        raise ValueError(f"'{args.directory}' is not a valid directory")
    if args.output is not None and args.output.is_dir():
        raise ValueError(f"Output path '{args.output}' is a directory")
