"""Role gating filter."""

from __future__ import annotations

from typing import Iterable

from ..errors import FilterConfigurationError
from ..models.datatypes import FilterResult, Forwarded, ParsedMessage, Role, Suppressed, coerce_role
from .base import ToggleableFilter

ROLE_FILTER_NAME = "role"


class RoleFilter(ToggleableFilter):
    """Suppress messages whose role is not in the allowed set.

    Roles are compared exactly; case folding of raw role text happens where
    messages are decoded (`agent_tts.io.message_reader`).
    """

    def __init__(
        self,
        allowed_roles: Iterable[Role | str] = (Role.ASSISTANT,),
        enabled: bool = True,
    ) -> None:
        """Create the filter with an initial allowed-role set."""

        super().__init__(ROLE_FILTER_NAME, enabled)
        self._allowed_roles = self._normalize_roles(allowed_roles)

    @property
    def allowed_roles(self) -> frozenset[Role]:
        """Current allowed-role snapshot."""

        return self._allowed_roles

    def set_allowed_roles(self, roles: Iterable[Role | str]) -> None:
        """Validate `roles` and swap in the new allowed set."""

        self._allowed_roles = self._normalize_roles(roles)

    def filter(self, message: ParsedMessage) -> FilterResult:
        """Forward messages whose role is exactly an allowed role value."""

        if not self._enabled:
            return Forwarded(message)

        try:
            role = Role(message.role)
        except ValueError:
            role = None
        if role is not None and role in self._allowed_roles:
            return Forwarded(message)
        return Suppressed(filter_name=self._name, reason="role_not_allowed")

    @staticmethod
    def _normalize_roles(roles: Iterable[Role | str]) -> frozenset[Role]:
        """Validate configured role names into a frozen allowed set."""

        if isinstance(roles, str):
            roles = (roles,)

        normalized: set[Role] = set()
        for raw in roles:
            role = coerce_role(raw)
            if role is None:
                supported = ", ".join(member.value for member in Role)
                raise FilterConfigurationError(
                    filter_name=ROLE_FILTER_NAME,
                    detail=f"Unknown role `{raw}`.",
                    hint=f"Allowed roles must be drawn from: {supported}.",
                )
            normalized.add(role)
        return frozenset(normalized)
