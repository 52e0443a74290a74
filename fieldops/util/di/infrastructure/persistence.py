"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from fieldops.config import Settings
from fieldops.domain.repository import (
    CompanyRepository,
    EmployeeRepository,
    InviteRepository,
    MembershipRepository,
    NotificationRepository,
)
from fieldops.persistence.database import create_engine, create_session_factory
from fieldops.persistence.repository import (
    PostgresCompanyRepository,
    PostgresEmployeeRepository,
    PostgresInviteRepository,
    PostgresMembershipRepository,
    PostgresNotificationRepository,
)
from fieldops.util.di.base import ProviderBase
from fieldops.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_engine(self, settings: Settings) -> AsyncEngine:
        """Provide database engine."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        return engine

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request unless an
        exception escapes the request. Domain errors are turned into
        responses by the exception handlers first, so they commit whatever was
        written before them (e.g. an employee link and membership upsert ahead
        of an expired CAS). Only unhandled exceptions roll back.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.info("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_invite_repository(self, session: AsyncSession) -> InviteRepository:
        """Provide Invite repository."""
        return PostgresInviteRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_employee_repository(self, session: AsyncSession) -> EmployeeRepository:
        """Provide Employee repository."""
        return PostgresEmployeeRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_company_repository(self, session: AsyncSession) -> CompanyRepository:
        """Provide Company repository."""
        return PostgresCompanyRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_membership_repository(
        self, session: AsyncSession
    ) -> MembershipRepository:
        """Provide Membership repository."""
        return PostgresMembershipRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_notification_repository(
        self, session: AsyncSession
    ) -> NotificationRepository:
        """Provide Notification repository."""
        return PostgresNotificationRepository(session)
