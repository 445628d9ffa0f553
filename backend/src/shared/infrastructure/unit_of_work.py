import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from auth.infrastructure.user_repository import DbUserRepository
from documents.infrastructure.document_repository import DbDocumentRepository
from documents.infrastructure.node_repository import DbWorkflowNodeRepository
from documents.infrastructure.version_ledger import DbVersionLedger
from shared.exceptions import DeadlineExceededError, InternalError
from sharing.infrastructure.share_repository import DbShareGrantRepository

logger = logging.getLogger(__name__)


class DbUnitOfWork:
    """One session, one transaction at a time."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.users = DbUserRepository(session)
        self.documents = DbDocumentRepository(session)
        self.versions = DbVersionLedger(session)
        self.nodes = DbWorkflowNodeRepository(session)
        self.shares = DbShareGrantRepository(session)

    @asynccontextmanager
    async def transaction(self, timeout: float | None = None) -> AsyncIterator["DbUnitOfWork"]:
        """Commit everything done in the block, or roll all of it back.

        Storage failures surface as a single ``InternalError``; running past
        ``timeout`` seconds cancels the block and raises ``DeadlineExceededError``.
        Application errors raised in the block propagate unchanged after rollback.
        """
        deadline = asyncio.timeout(timeout)
        try:
            async with deadline:
                async with self.session.begin():
                    yield self
        except TimeoutError as exc:
            # Only our own deadline maps to DeadlineExceeded; driver timeouts are storage failures.
            if not deadline.expired():
                logger.exception("Storage timed out, transaction rolled back")
                raise InternalError() from exc
            logger.warning(f"Transaction exceeded its {timeout}s deadline and was rolled back")
            raise DeadlineExceededError() from exc
        except SQLAlchemyError as exc:
            logger.exception("Storage failure, transaction rolled back")
            raise InternalError() from exc
