"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services.

    Use cases are built per DI request scope and expose a single
    ``execute`` taking a pydantic request model.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
