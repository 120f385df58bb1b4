"""Command-line interface for dir2setup.

This module provides the command-line entry point, which captures a project
directory and writes the setup artifact generated from it.

Exit Codes:
    0: Successful completion
    1: Runtime error (unreadable directory, unreadable file with -R fail, write failure)
    2: Command-line syntax error
    126: Permission denied while listing the project directory

Example:
    # Capture the current directory into ./setup-project.py
    $ dir2setup

    # Capture another directory with extra exclusions
    $ dir2setup ~/projects/shop -i "*.log" -e .dockerignore
"""

import logging
import sys

from dir2setup.cli.argparser import create_parser, validate_args
from dir2setup.dir2setup import Dir2Setup
from dir2setup.exclusion_rules.base_rules import BaseExclusionRules
from dir2setup.exclusion_rules.composite_rules import CompositeExclusionRules
from dir2setup.exclusion_rules.git_rules import GitIgnoreExclusionRules
from dir2setup.exclusion_rules.pattern_rules import DEFAULT_EXCLUDE_PATTERNS, PatternExclusionRules
from dir2setup.snapshot_tree.read_error_action import ReadErrorAction

READ_ERROR_ACTIONS = {
    "warn": ReadErrorAction.WARN,
    "ignore": ReadErrorAction.IGNORE,
    "fail": ReadErrorAction.RAISE,
}


class MessageFormatter(logging.Formatter):
    """Format records as ``Warning: message`` to match the CLI's error lines."""

    def format(self, record: logging.LogRecord) -> str:
        return f"{record.levelname.capitalize()}: {record.getMessage()}"


def configure_logging(verbose: bool = False) -> None:
    """Send the package's log records to stderr."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(MessageFormatter())
    package_logger = logging.getLogger("dir2setup")
    package_logger.handlers = [handler]
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


def build_exclusion_rules(segment_aware: bool, extra_rules: GitIgnoreExclusionRules) -> BaseExclusionRules:
    """Combine the built-in pattern list with any -i/-e exclusions."""
    base_rules = PatternExclusionRules(DEFAULT_EXCLUDE_PATTERNS, segment_aware=segment_aware)
    if not extra_rules.has_rules():
        return base_rules
    return CompositeExclusionRules([base_rules, extra_rules])


def format_summary(generator: Dir2Setup) -> str:
    """Format the snapshot counts into a human-readable string."""
    result = [
        f"Directories: {generator.directory_count}",
        f"Files: {generator.file_count}",
        f"Characters: {generator.character_count}",
        f"Skipped (unreadable): {len(generator.skipped_files)}",
    ]
    return "\n".join(result)


def main() -> None:
    """Main entry point for the dir2setup command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Permission denied
    """
    try:
        extra_rules = GitIgnoreExclusionRules()
        parser = create_parser(extra_rules)
        args = parser.parse_args()

        configure_logging(args.verbose)
        validate_args(args)

        generator = Dir2Setup(
            args.directory,
            exclusion_rules=build_exclusion_rules(args.segment_aware, extra_rules),
            output_format=args.format,
            read_error_action=READ_ERROR_ACTIONS[args.read_error_action],
        )

        print(f"Scanning {args.directory}...")
        if args.tree:
            for line in generator.stream_tree():
                print(line)

        output_path = args.output if args.output is not None else generator.default_output_path
        print(f"Generating {output_path}...")
        generator.write(output_path)
        print(f"{output_path} generated successfully!")

        if args.summary:
            print(format_summary(generator))

    except PermissionError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(126)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
