"""Application ports (Protocols) implemented by infrastructure."""

from object_selector.application.interfaces.repositories import IPostRepository
from object_selector.application.interfaces.services import (
    IAttachmentResolver,
    ICapabilityChecker,
    INonceManager,
    ITypeStatusRegistry,
)

__all__ = [
    "IAttachmentResolver",
    "ICapabilityChecker",
    "INonceManager",
    "IPostRepository",
    "ITypeStatusRegistry",
]
