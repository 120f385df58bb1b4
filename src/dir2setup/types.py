from os import PathLike
from typing import Dict, Union

# Complete path type including strings and any path-like object
PathType = Union[str, PathLike[str]]

# Plain nested mapping form of a snapshot: directories map to nested mappings,
# files map to their text content.
TreeMapping = Dict[str, Union["TreeMapping", str]]
