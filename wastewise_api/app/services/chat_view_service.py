"""
Enriched chat list for the messaging page.

For every chat a user takes part in, the view carries the last
message, a public projection of the other participant and a summary
of the listing the chat is about.  The view is rebuilt on each request
from the facade; nothing is cached.
"""

from datetime import datetime, timezone
from typing import List

from ..schemas.chat import EnrichedChat
from ..schemas.item import ItemSummary
from ..schemas.user import UserProjection
from .storage import Storage

# Chats without activity sort after every real timestamp.
_NO_ACTIVITY = datetime.min.replace(tzinfo=timezone.utc)


class ChatViewService:
    """Builds ``EnrichedChat`` projections."""

    def __init__(self, storage: Storage) -> None:
        self.storage = storage

    async def build_enriched_chats(self, user_id: int) -> List[EnrichedChat]:
        """Return the user's chats, most recently active first."""
        enriched: List[EnrichedChat] = []
        for chat in await self.storage.get_chats_by_user_id(user_id):
            messages = await self.storage.get_messages_by_chat_id(chat.id)
            last_message = messages[-1] if messages else None

            other = await self.storage.get_user(chat.other_participant(user_id))
            other_user = (
                UserProjection(id=other.id, name=other.name, profile_image=other.profile_image)
                if other is not None
                else None
            )

            item = await self.storage.get_item(chat.item_id) if chat.item_id else None
            item_summary = (
                ItemSummary(id=item.id, title=item.title, images=item.images)
                if item is not None
                else None
            )

            enriched.append(
                EnrichedChat(
                    **chat.model_dump(),
                    last_message=last_message,
                    other_user=other_user,
                    item=item_summary,
                )
            )

        enriched.sort(key=lambda c: c.last_message_at or _NO_ACTIVITY, reverse=True)
        return enriched
