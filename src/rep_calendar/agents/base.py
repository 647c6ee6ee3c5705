"""Base agent class."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from rep_calendar.errors import InvalidOperation, PermissionDenied
from rep_calendar.models.rep import ActorRole


class BaseAgent(ABC):
    """Abstract base class for all agents."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Agent identifier."""

    def process(self, action: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Process a request and return results.

        Args:
            action: The action to perform.
            payload: Action-specific data.

        Returns:
            Result dictionary.

        Raises:
            InvalidOperation: If action is not supported.
        """
        method_name = f"_handle_{action}"
        handler = getattr(self, method_name, None)
        if handler is None:
            raise InvalidOperation(
                f"Agent '{self.name}' does not support action '{action}'",
                agent=self.name,
                action=action,
            )
        return handler(payload)

    @staticmethod
    def require_role(role: ActorRole | str, allowed: set[ActorRole], what: str) -> ActorRole:
        """Coerce ``role`` and check it is one of ``allowed``."""
        try:
            role = ActorRole(role)
        except ValueError as exc:
            raise PermissionDenied(f"Unknown role: {role}", role=str(role)) from exc
        if role not in allowed:
            raise PermissionDenied(f"Role '{role.value}' may not {what}", role=role.value)
        return role
