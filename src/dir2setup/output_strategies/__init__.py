"""Output strategies turning a project snapshot into a setup artifact."""

from typing import Dict, Optional, Type

from dir2setup.setup_plan import SetupPlan

from .base_strategy import OutputStrategy
from .json_strategy import JSONOutputStrategy
from .node_strategy import NodeOutputStrategy
from .python_strategy import PythonOutputStrategy

STRATEGIES: Dict[str, Type[OutputStrategy]] = {
    "python": PythonOutputStrategy,
    "node": NodeOutputStrategy,
    "json": JSONOutputStrategy,
}


def get_strategy(output_format: str, setup_plan: Optional[SetupPlan] = None) -> OutputStrategy:
    """Create the output strategy registered under ``output_format``.

    Raises:
        ValueError: If the format is not one of the registered names.

    Example:
        >>> get_strategy("node").get_default_filename()
        'setup-project.js'
    """
    try:
        strategy_class = STRATEGIES[output_format.lower()]
    except KeyError:
        raise ValueError(f"Unsupported output format: {output_format}. Must be one of: {', '.join(STRATEGIES)}")
    return strategy_class(setup_plan)


__all__ = [
    "JSONOutputStrategy",
    "NodeOutputStrategy",
    "OutputStrategy",
    "PythonOutputStrategy",
    "STRATEGIES",
    "get_strategy",
]
