"""Domain enums for fmutils."""
from enum import Enum


class FieldKind(Enum):
    """Shape of a message field as seen by the traversal engine."""
    SCALAR = "scalar"
    MESSAGE = "message"
    LIST = "list"
    MAP = "map"


class TraversalMode(Enum):
    """What happens to the fields a mask matches."""
    FILTER = "filter"
    PRUNE = "prune"
