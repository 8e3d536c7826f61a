"""PostgreSQL implementation of Profile repository."""

from datetime import datetime, timezone
from typing import Optional, Sequence

from sqlalchemy import and_, case, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from relay.domain.model import Profile
from relay.domain.repository import ProfileRepository
from relay.domain.value import CounterField, GeoPoint, Identity
from relay.persistence.mappers import profile_to_dict, row_to_profile
from relay.persistence.tables import profiles_table

# Never written by save() on update; each has its own targeted UPDATE
_GUARDED_COLUMNS = {field.value for field in CounterField} | {
    "id",
    "created_at",
    "push_token",
    "latitude",
    "longitude",
}


class PostgresProfileRepository(ProfileRepository):
    """PostgreSQL implementation of ProfileRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_identity(self, identity: Identity) -> Optional[Profile]:
        """Find a profile by identity."""
        stmt = select(profiles_table).where(profiles_table.c.identity == identity.root)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_profile(dict(row)) if row else None

    async def find_by_identities(
        self, identities: Sequence[Identity]
    ) -> list[Profile]:
        """Find profiles for several identities (batch query)."""
        if not identities:
            return []
        stmt = select(profiles_table).where(
            profiles_table.c.identity.in_([i.root for i in identities])
        )
        result = await self.session.execute(stmt)
        return [row_to_profile(dict(row)) for row in result.mappings().all()]

    async def find_within_box(
        self, south_west: GeoPoint, north_east: GeoPoint
    ) -> list[Profile]:
        """Find profiles whose location lies inside a bounding box."""
        longitude = profiles_table.c.longitude
        if south_west.longitude <= north_east.longitude:
            in_longitude = longitude.between(south_west.longitude, north_east.longitude)
        else:
            # Box crosses the antimeridian
            in_longitude = or_(
                longitude >= south_west.longitude, longitude <= north_east.longitude
            )
        stmt = select(profiles_table).where(
            and_(
                profiles_table.c.latitude.between(
                    south_west.latitude, north_east.latitude
                ),
                in_longitude,
            )
        )
        result = await self.session.execute(stmt)
        return [row_to_profile(dict(row)) for row in result.mappings().all()]

    async def save(self, profile: Profile) -> Profile:
        """Save a profile (create or update)."""
        existing = await self.find_by_identity(profile.identity)

        profile_dict = profile_to_dict(profile)

        if existing:
            values = {
                key: value
                for key, value in profile_dict.items()
                if key not in _GUARDED_COLUMNS
            }
            values["updated_at"] = datetime.now(timezone.utc)
            stmt = (
                profiles_table.update()
                .where(profiles_table.c.identity == profile.identity.root)
                .values(**values)
                .returning(*profiles_table.c)
            )
        else:
            stmt = profiles_table.insert().values(**profile_dict).returning(
                *profiles_table.c
            )

        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.flush()
        return row_to_profile(dict(row))

    async def set_push_token(
        self, identity: Identity, token: Optional[str]
    ) -> Optional[Profile]:
        """Overwrite only the push token column."""
        return await self._update_columns(identity, push_token=token)

    async def set_location(
        self, identity: Identity, location: GeoPoint
    ) -> Optional[Profile]:
        """Overwrite only the location columns."""
        return await self._update_columns(
            identity, latitude=location.latitude, longitude=location.longitude
        )

    async def clear_push_token(self, identity: Identity, token: str) -> bool:
        """Clear the push token if it still equals ``token``."""
        stmt = (
            profiles_table.update()
            .where(
                and_(
                    profiles_table.c.identity == identity.root,
                    profiles_table.c.push_token == token,
                )
            )
            .values(push_token=None)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

    async def increment_counter(self, identity: Identity, field: CounterField) -> None:
        """Atomically increment a counter by 1."""
        column = profiles_table.c[field.value]
        stmt = (
            profiles_table.update()
            .where(profiles_table.c.identity == identity.root)
            .values({column: column + 1})
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def decrement_counter(self, identity: Identity, field: CounterField) -> None:
        """Atomically decrement a counter by 1 (minimum 0)."""
        column = profiles_table.c[field.value]
        stmt = (
            profiles_table.update()
            .where(profiles_table.c.identity == identity.root)
            .values({column: case((column > 0, column - 1), else_=0)})
        )
        await self.session.execute(stmt)
        await self.session.flush()

    async def _update_columns(
        self, identity: Identity, **values: object
    ) -> Optional[Profile]:
        stmt = (
            profiles_table.update()
            .where(profiles_table.c.identity == identity.root)
            .values(**values, updated_at=datetime.now(timezone.utc))
            .returning(*profiles_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_profile(dict(row)) if row else None
