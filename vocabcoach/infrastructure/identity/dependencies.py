"""FastAPI dependencies for resolving the calling user."""

from typing import Annotated

from fastapi import Depends, Header

from vocabcoach.domain.common.value_objects import UserId
from vocabcoach.exceptions import MissingUserException


def get_current_user_id(
    x_user_id: Annotated[str | None, Header()] = None,
) -> UserId:
    """
    Resolve the user from the ``X-User-Id`` header set by the auth proxy.

    Raises:
        HTTPException: 401 if the header is missing or blank
    """
    if x_user_id is None or not x_user_id.strip():
        raise MissingUserException
    return UserId(x_user_id.strip())


CurrentUserId = Annotated[UserId, Depends(get_current_user_id)]
