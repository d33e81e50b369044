"""Domain enumerations for the object selector."""

from enum import Enum


class QueryMode(str, Enum):
    """Result mode of a selector query.

    FLAT is a paginated, optionally searched list; TREE is a depth-annotated
    pre-order flattening of one hierarchical post type.
    """

    FLAT = "flat"
    TREE = "tree"


class MetaCompare(str, Enum):
    """Meta value comparison operators accepted from clients."""

    EQ = "="
    NE = "!="
    GT = ">"
    GE = ">="
    LT = "<"
    LE = "<="

    @classmethod
    def values(cls) -> list[str]:
        """Return all operators as strings (e.g. for allow-list checks)."""
        return [op.value for op in cls]


class UserRole(str, Enum):
    """Built-in caller roles; each maps to a fixed capability set."""

    ADMINISTRATOR = "administrator"
    EDITOR = "editor"
    AUTHOR = "author"
    CONTRIBUTOR = "contributor"
    SUBSCRIBER = "subscriber"
