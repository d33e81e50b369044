"""Infrastructure services: registry, capability checks, attachments, preview hooks."""

from object_selector.infrastructure.services.attachment_resolver import AttachmentResolver
from object_selector.infrastructure.services.capability_checker import RoleCapabilityChecker
from object_selector.infrastructure.services.content_registry import ContentRegistry
from object_selector.infrastructure.services.preview import preview_post_settings

__all__ = [
    "AttachmentResolver",
    "ContentRegistry",
    "RoleCapabilityChecker",
    "preview_post_settings",
]
