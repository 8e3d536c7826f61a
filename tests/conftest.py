"""Test configuration and fixtures."""

from typing import Any
from uuid import uuid4

import logfire

from relay.domain.model import Profile
from relay.domain.service import Connection
from relay.domain.value import ConnectionId, Identity, ProfileId

# Console only, nothing leaves the test process
logfire.configure(send_to_logfire=False, console=False)


def make_profile(identity: str, **fields) -> Profile:
    """Build a profile for ``identity`` with a fresh id."""
    return Profile(id=ProfileId(uuid4()), identity=Identity(identity), **fields)


class RecordingConnection(Connection):
    """Connection that records emitted events instead of sending them."""

    def __init__(self, connection_id: str, fail: bool = False) -> None:
        self.connection_id = ConnectionId(connection_id)
        self.fail = fail
        self.events: list[tuple[str, Any]] = []

    async def emit(self, event: str, data: Any) -> None:
        if self.fail:
            raise ConnectionError(f"{self.connection_id} is closed")
        self.events.append((event, data))

    def named(self, event: str) -> list[Any]:
        """Payloads of every emitted ``event``."""
        return [data for name, data in self.events if name == event]
