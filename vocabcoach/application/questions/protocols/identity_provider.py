"""Protocol for resolving the signed-in user."""

from typing import Protocol

from vocabcoach.domain.common.value_objects import UserId


class IdentityProviderProtocol(Protocol):
    def current_user_id(self) -> UserId | None:
        """The current user's id, or None when nobody is signed in."""
        ...
