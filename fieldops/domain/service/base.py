"""Base service class for domain services."""

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

import logfire
from sqlalchemy.exc import SQLAlchemyError

from fieldops.domain.error import DomainError, TransientError

T = TypeVar("T")


class Service:
    """Base class for all domain services.

    Every store and identity provider call goes through ``_call`` so that a
    hung dependency surfaces as a retryable error instead of a stuck request.
    """

    # Seconds; None waits forever
    operation_timeout: float | None = None

    async def _call(self, operation: str, awaitable: Awaitable[T]) -> T:
        """Await a store or provider call under the operation timeout.

        Infrastructure failures and timeouts become ``TransientError``;
        domain errors pass through unchanged. Nothing is retried here.
        """
        try:
            async with asyncio.timeout(self.operation_timeout):
                return await awaitable
        except DomainError:
            raise
        except TimeoutError as e:
            logfire.error("Operation timed out", operation=operation)
            raise TransientError(f"{operation} timed out", cause=e) from e
        except (SQLAlchemyError, OSError) as e:
            logfire.error("Operation failed", operation=operation, error=str(e))
            raise TransientError(f"{operation} failed", cause=e) from e
