"""PostgreSQL implementation of Message repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import and_, func, insert, or_, select
from sqlalchemy.exc import DBAPIError
from sqlalchemy.ext.asyncio import AsyncSession

from relay.domain.error import TransientStoreError
from relay.domain.model import Message
from relay.domain.repository import MessageRepository
from relay.domain.value import Identity, MessageId
from relay.persistence.mappers import message_to_dict, row_to_message
from relay.persistence.tables import messages_table


class PostgresMessageRepository(MessageRepository):
    """PostgreSQL implementation of MessageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, message_id: MessageId) -> Optional[Message]:
        """Find a message by ID."""
        stmt = select(messages_table).where(messages_table.c.id == message_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_message(dict(row)) if row else None

    async def save(self, message: Message) -> Message:
        """Insert and commit a message.

        Commits immediately: live delivery and push happen after this
        returns and must never announce an uncommitted message.

        Raises:
            TransientStoreError: If the database rejects or drops the write
        """
        stmt = (
            insert(messages_table)
            .values(**message_to_dict(message))
            .returning(messages_table.c.created_at)
        )
        try:
            result = await self.session.execute(stmt)
            created_at = result.scalar_one()
            await self.session.commit()
        except DBAPIError as e:
            await self.session.rollback()
            raise TransientStoreError("Failed to send message") from e
        return message.model_copy(update={"created_at": created_at})

    async def find_conversation(
        self,
        first: Identity,
        second: Identity,
        limit: int,
        before: Optional[datetime] = None,
    ) -> list[Message]:
        """Find messages exchanged between two identities, newest first."""
        conditions = [
            or_(
                and_(
                    messages_table.c.sender_id == first.root,
                    messages_table.c.receiver_id == second.root,
                ),
                and_(
                    messages_table.c.sender_id == second.root,
                    messages_table.c.receiver_id == first.root,
                ),
            ),
            or_(
                messages_table.c.expires_at.is_(None),
                messages_table.c.expires_at > func.now(),
            ),
        ]
        if before is not None:
            conditions.append(messages_table.c.created_at < before)

        stmt = (
            select(messages_table)
            .where(and_(*conditions))
            .order_by(messages_table.c.created_at.desc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return [row_to_message(dict(row)) for row in result.mappings().all()]
