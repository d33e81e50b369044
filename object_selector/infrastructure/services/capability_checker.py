"""Role-based capability checker (implements ICapabilityChecker)."""

from __future__ import annotations

from collections.abc import Iterable

from object_selector.domain.capabilities import ALL_CAPABILITIES, capabilities_for_role


class RoleCapabilityChecker:
    """Answers capability checks from a fixed capability set (built per request)."""

    def __init__(self, capabilities: Iterable[str]) -> None:
        self.capabilities = frozenset(capabilities)

    @classmethod
    def for_role(cls, role: str | None) -> RoleCapabilityChecker:
        return cls(capabilities_for_role(role))

    def can(self, capability: str) -> bool:
        return ALL_CAPABILITIES in self.capabilities or capability in self.capabilities
