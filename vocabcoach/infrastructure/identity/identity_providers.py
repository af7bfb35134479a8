from vocabcoach.domain.common.value_objects import UserId


class StaticIdentityProvider:
    """Identity of a single, already authenticated user."""

    def __init__(self, user_id: UserId | None) -> None:
        self.user_id = user_id

    def current_user_id(self) -> UserId | None:
        return self.user_id
