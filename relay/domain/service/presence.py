"""Online presence directory.

Maps a stable identity to the one live connection that can currently
reach it. Entries are created by an explicit join (a fresh connection is
anonymous), superseded by a later join for the same identity and dropped
when the owning connection closes.

The directory is process-local and not a source of truth: after a restart
every client has to join again. All access happens on the event loop, so
no lock is taken.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import logfire

from relay.domain.value import ConnectionId, Identity

from .base import Service


class Connection(ABC):
    """Addressable handle for one live client connection."""

    connection_id: ConnectionId

    @abstractmethod
    async def emit(self, event: str, data: Any) -> None:
        """Send an event to the client.

        Raises:
            Exception: Transport specific, when the connection is gone
        """
        pass


class PresenceDirectory(Service):
    """Identity -> connection directory with a reverse index."""

    def __init__(self) -> None:
        self._by_identity: dict[Identity, Connection] = {}
        self._by_connection: dict[ConnectionId, Identity] = {}

    def join(self, identity: Identity | str, connection: Connection) -> Identity:
        """Register ``connection`` as the live channel for ``identity``.

        Last join wins. A connection carries at most one identity, so
        re-joining under another identity drops the earlier entry.

        Args:
            identity: Identity announced by the client
            connection: Connection it was announced on

        Returns:
            The validated identity

        Raises:
            ValidationError: If the identity is empty or too long
        """
        identity = self._coerce(identity)

        previous = self._by_connection.get(connection.connection_id)
        if previous is not None and previous != identity:
            if self._is_current(previous, connection):
                del self._by_identity[previous]

        superseded = self._by_identity.get(identity)
        if superseded is not None and superseded.connection_id != connection.connection_id:
            self._by_connection.pop(superseded.connection_id, None)
            logfire.info(
                "Presence superseded",
                identity=identity.root,
                old_connection=superseded.connection_id,
                new_connection=connection.connection_id,
            )

        self._by_identity[identity] = connection
        self._by_connection[connection.connection_id] = identity
        logfire.info(
            "Presence joined",
            identity=identity.root,
            connection=connection.connection_id,
        )
        return identity

    def resolve(self, identity: Identity) -> Optional[Connection]:
        """Return the live connection for ``identity``, if any."""
        return self._by_identity.get(identity)

    def remove(self, connection: Connection) -> Optional[Identity]:
        """Forget ``connection``.

        Returns:
            The identity the connection was serving, or None if it never
            joined or had already been superseded
        """
        identity = self._by_connection.pop(connection.connection_id, None)
        if identity is None:
            return None
        if self._is_current(identity, connection):
            del self._by_identity[identity]
        logfire.info(
            "Presence removed",
            identity=identity.root,
            connection=connection.connection_id,
        )
        return identity

    def identity_of(self, connection: Connection) -> Optional[Identity]:
        """Identity a connection has joined as, if any."""
        return self._by_connection.get(connection.connection_id)

    @property
    def online_count(self) -> int:
        """Number of identities with a live connection."""
        return len(self._by_identity)

    def __contains__(self, identity: object) -> bool:
        return identity in self._by_identity

    def _is_current(self, identity: Identity, connection: Connection) -> bool:
        current = self._by_identity.get(identity)
        return current is not None and current.connection_id == connection.connection_id

    @staticmethod
    def _coerce(identity: Identity | str) -> Identity:
        if isinstance(identity, Identity):
            return identity
        return Identity.parse(identity)
