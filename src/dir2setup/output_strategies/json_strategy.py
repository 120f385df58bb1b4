"""JSON output strategy writing the bare snapshot as a data file."""

import json

from dir2setup.types import TreeMapping

from .base_strategy import OutputStrategy


class JSONOutputStrategy(OutputStrategy):
    """Output strategy that writes the snapshot mapping as a JSON document.

    The document carries no setup steps; it is the data half of a setup, meant to
    be consumed by a separate materializer. Keys are sorted and non-ASCII text is
    escaped, which also keeps file names that are not valid UTF-8 representable.

    Example:
        >>> strategy = JSONOutputStrategy()
        >>> print(strategy.emit({"frontend": {"package.json": "{}"}}), end="")
        {
          "frontend": {
            "package.json": "{}"
          }
        }
    """

    def render(self, structure: TreeMapping) -> str:
        return json.dumps(structure, indent=2, ensure_ascii=True, sort_keys=True) + "\n"

    def get_default_filename(self) -> str:
        return "project-structure.json"
