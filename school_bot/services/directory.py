"""Member, explanation and roster storage.

Maps the bot's models onto database tables through :class:`RecordStore`.
When scoping by chat is enabled, members are saved with the chat id and only
members of the same chat are returned; the alert roster is always per chat.
"""

import logging

from ..config import StoreConfig
from ..models import ExplanationRecord, GroupMember, Member
from .record_store import RecordStore, eq, ilike

logger = logging.getLogger(__name__)


class MemberDirectory:
    """Table-aware operations used by the command handlers."""

    def __init__(self, store: RecordStore, config: StoreConfig, scope_by_chat: bool = False):
        self.store = store
        self.config = config
        self.scope_by_chat = scope_by_chat

    def _scope_filter(self, scope_id: int | None) -> dict[str, str]:
        if self.scope_by_chat and scope_id is not None:
            return {"scope_id": eq(scope_id)}
        return {}

    async def add_member(
        self,
        first_name: str,
        class_name: str,
        age: int,
        added_by: int,
        scope_id: int | None = None,
    ) -> Member:
        """Save a new member and return it with the database-assigned id."""
        member = Member(
            first_name=first_name,
            class_name=class_name,
            age=age,
            added_by=added_by,
            scope_id=scope_id if self.scope_by_chat else None,
        )
        row = await self.store.insert(self.config.members_table, member.to_row())
        saved = member.model_copy(update={"id": row.get("id")})
        logger.info(f"Member {saved.id} ({first_name}, {class_name}) added by {added_by}")
        return saved

    async def members_in_class(self, class_name: str, scope_id: int | None = None) -> list[Member]:
        """Members whose class matches ``class_name`` ignoring case."""
        filters = {"class": ilike(class_name), **self._scope_filter(scope_id)}
        rows = await self.store.query(self.config.members_table, filters, order="id.asc")
        return [Member.model_validate(row) for row in rows]

    async def list_members(self, scope_id: int | None = None) -> list[Member]:
        rows = await self.store.query(
            self.config.members_table, self._scope_filter(scope_id), order="id.asc"
        )
        return [Member.model_validate(row) for row in rows]

    async def save_explanation(self, record: ExplanationRecord) -> None:
        if not self.scope_by_chat:
            record = record.model_copy(update={"scope_id": None})
        await self.store.insert(self.config.explanations_table, record.to_row(), returning=None)

    async def roster(self, scope_id: int) -> list[GroupMember]:
        """Alert roster of one chat."""
        rows = await self.store.query(
            self.config.roster_table, {"scope_id": eq(scope_id)}, columns="scope_id,user_id"
        )
        return [GroupMember.model_validate(row) for row in rows]
