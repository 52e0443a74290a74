"""Base use case."""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from pydantic import BaseModel

RequestT = TypeVar("RequestT", bound=BaseModel)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class BaseUseCase(ABC, Generic[RequestT, ResponseT]):
    """Base use case for orchestrating domain services.

    Use cases take and return pydantic models so the interface layer never
    sees domain objects directly.
    """

    @abstractmethod
    async def execute(self, request: RequestT) -> ResponseT:
        pass
