"""Message entity.

Messages are immutable once created. There is no update or delete path.
"""

from datetime import datetime
from typing import Optional

from relay.domain.model.common import DomainModel
from relay.domain.value import Identity, MessageId


class Message(DomainModel):
    """Chat message between two identities.

    created_at is assigned by the store on save; it is None only on a
    message that has not been persisted yet.
    """

    id: MessageId
    sender_id: Identity
    receiver_id: Identity
    text: str
    created_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
