"""Project snapshot to setup script conversion utilities.

This package captures a project directory (minus dependency folders, build
output and other excluded paths) and turns it into a single self-contained
script that recreates the tree and runs the project's setup commands.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("dir2setup")
except PackageNotFoundError:
    __version__ = "unknown"
