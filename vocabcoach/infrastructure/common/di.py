from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

T = TypeVar("T")


def inject_provider(provider: Provider[T]) -> Callable[[], T]:
    """
    Create a FastAPI dependency for a container provider.

    The provider is resolved on every request, so overrides applied to the
    container (in tests, for example) take effect immediately.
    """

    def dependency() -> T:
        return provider()

    return dependency
