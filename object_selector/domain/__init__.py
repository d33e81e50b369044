"""Domain layer: entities, enums, capabilities, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from object_selector.domain.entities import PostStatus, PostType, PostTypeCapabilities
from object_selector.domain.enums import MetaCompare, QueryMode, UserRole
from object_selector.domain.exceptions import SelectorException

__all__ = [
    "MetaCompare",
    "PostStatus",
    "PostType",
    "PostTypeCapabilities",
    "QueryMode",
    "SelectorException",
    "UserRole",
]
