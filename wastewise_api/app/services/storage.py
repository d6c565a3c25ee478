"""
Query/mutation facade over the in-memory entity store.

``Storage`` is the only component that touches ``EntityStore``.  It
exposes a narrow set of operations per entity kind: get by id, get by
foreign key, filtered lists, create, partial update and (for listings)
delete.  Lookups of unknown identifiers return ``None`` rather than
raising; handlers translate that into a 404.

Creates assign the next identifier and default derived fields
(counters to zero, timestamps to now).  Updates go through ``merge``,
which applies a typed patch restricted to the entity's fields and
re-validates the result.

Composite sequences that read and then write (username uniqueness,
duplicate-chat detection, view counting) run under the per-kind lock
of the store, so concurrent requests on the same event loop cannot
interleave inside them.  Cross-kind side effects (user counters after
an item create, chat timestamp after a message) are not atomic with
the primary write.
"""

import logging
from typing import List, Optional, Tuple, TypeVar

from pydantic import BaseModel, ValidationError

from ..core.errors import DuplicateUsername, InvalidPayload
from ..core.geo import within_radius
from ..core.security import hash_password
from ..core.store import EntityStore
from ..core.validation import error_list
from ..schemas.base import utcnow
from ..schemas.chat import Chat, ChatCreate, ChatPatch
from ..schemas.disposal_center import DisposalCenter, DisposalCenterCreate
from ..schemas.event import Event, EventCreate
from ..schemas.item import Item, ItemCreate, ItemPatch
from ..schemas.message import Message, MessageCreate
from ..schemas.user import User, UserCreate, UserPatch

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)

DONATION_BONUS_POINTS = 10
ALL_CATEGORIES = "All"


def merge(record: RecordT, patch: BaseModel) -> RecordT:
    """Apply the fields explicitly set on ``patch`` to ``record``.

    Only fields the record declares are applied; the merged record is
    validated again so model-level invariants still hold.  A patch that
    would leave the record invalid raises ``InvalidPayload``.
    """
    changes = {
        key: value
        for key, value in patch.model_dump(exclude_unset=True).items()
        if key in type(record).model_fields
    }
    if not changes:
        return record
    try:
        return type(record).model_validate({**record.model_dump(), **changes})
    except ValidationError as exc:
        raise InvalidPayload(error_list(exc)) from exc


class Storage:
    """Facade over ``EntityStore`` for every entity kind."""

    def __init__(self, store: Optional[EntityStore] = None) -> None:
        self.store = store or EntityStore()

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------
    async def get_user(self, user_id: int) -> Optional[User]:
        return self.store.get("users", user_id)

    async def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self.store.all("users"):
            if user.username == username:
                return user
        return None

    async def create_user(self, data: UserCreate) -> User:
        """Store a new user.

        ``data.password`` is hashed here.  No uniqueness check happens:
        use ``register_user`` when the username comes from a client.
        """
        payload = data.model_dump()
        payload["password"] = hash_password(data.password)
        user = self.store.create("users", lambda new_id: User(id=new_id, created_at=utcnow(), **payload))
        logger.info("Created user %s (%s)", user.id, user.username)
        return user

    async def register_user(self, data: UserCreate) -> User:
        """Create a user unless the username is already taken."""
        async with self.store.lock("users"):
            if await self.get_user_by_username(data.username) is not None:
                raise DuplicateUsername(data.username)
            return await self.create_user(data)

    async def update_user(self, user_id: int, patch: UserPatch) -> Optional[User]:
        user = self.store.get("users", user_id)
        if user is None:
            return None
        if patch.password is not None:
            patch = patch.model_copy(update={"password": hash_password(patch.password)})
        updated = merge(user, patch)
        self.store.put("users", user_id, updated)
        return updated

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------
    async def get_item(self, item_id: int) -> Optional[Item]:
        return self.store.get("items", item_id)

    async def get_items_by_user_id(self, user_id: int) -> List[Item]:
        return [item for item in self.store.all("items") if item.user_id == user_id]

    async def get_nearby_items(
        self,
        latitude: Optional[float],
        longitude: Optional[float],
        radius_km: float,
        category: Optional[str] = None,
    ) -> List[Item]:
        """Return available listings, optionally by category and distance.

        When both coordinates are given, only listings with coordinates
        within ``radius_km`` are kept.  With either coordinate missing
        the distance filter is skipped and every available listing
        matches.  A category of ``"All"`` means no category filter.
        """
        items = [item for item in self.store.all("items") if item.status == "available"]
        if category and category != ALL_CATEGORIES:
            items = [item for item in items if item.category == category]
        if latitude is not None and longitude is not None:
            items = [
                item
                for item in items
                if within_radius(latitude, longitude, radius_km, item.latitude, item.longitude)
            ]
        return items

    async def create_item(self, data: ItemCreate) -> Item:
        """Store a new listing and credit the owner.

        The owner's ``items_shared`` grows by one; donations also add to
        ``donations_made`` and award ``DONATION_BONUS_POINTS``.
        """
        async with self.store.lock("items"):
            item = self.store.create(
                "items", lambda new_id: Item(id=new_id, created_at=utcnow(), **data.model_dump())
            )

        async with self.store.lock("users"):
            owner = self.store.get("users", item.user_id)
            if owner is not None:
                stats = {"items_shared": owner.items_shared + 1}
                if item.type == "donate":
                    stats["donations_made"] = owner.donations_made + 1
                    stats["green_points"] = owner.green_points + DONATION_BONUS_POINTS
                self.store.put("users", owner.id, merge(owner, UserPatch(**stats)))
            else:
                logger.warning("Item %s references unknown user %s", item.id, item.user_id)

        logger.info("Created %s item %s for user %s", item.type, item.id, item.user_id)
        return item

    async def update_item(self, item_id: int, patch: ItemPatch) -> Optional[Item]:
        item = self.store.get("items", item_id)
        if item is None:
            return None
        updated = merge(item, patch)
        self.store.put("items", item_id, updated)
        return updated

    async def record_item_view(self, item_id: int) -> Optional[Item]:
        """Increment the view counter of a listing."""
        async with self.store.lock("items"):
            item = self.store.get("items", item_id)
            if item is None:
                return None
            return await self.update_item(item_id, ItemPatch(views=item.views + 1))

    async def delete_item(self, item_id: int) -> bool:
        deleted = self.store.delete("items", item_id)
        if deleted:
            logger.info("Deleted item %s", item_id)
        return deleted

    # ------------------------------------------------------------------
    # Chats
    # ------------------------------------------------------------------
    async def get_chat(self, chat_id: int) -> Optional[Chat]:
        return self.store.get("chats", chat_id)

    async def get_chats_by_user_id(self, user_id: int) -> List[Chat]:
        return [chat for chat in self.store.all("chats") if chat.has_participant(user_id)]

    async def create_chat(self, data: ChatCreate) -> Chat:
        """Store a new chat.  Callers wanting deduplication use ``find_or_create_chat``."""
        return self.store.create(
            "chats", lambda new_id: Chat(id=new_id, last_message_at=utcnow(), **data.model_dump())
        )

    async def find_or_create_chat(self, data: ChatCreate) -> Tuple[Chat, bool]:
        """Return the chat for this participant pair and listing, creating it if needed.

        The second element tells whether a new chat was created.  A new
        chat about an existing listing counts as one inquiry on it.
        """
        async with self.store.lock("chats"):
            for chat in await self.get_chats_by_user_id(data.user_id1):
                if chat.participants() == data.participants() and chat.item_id == data.item_id:
                    return chat, False
            chat = await self.create_chat(data)

        if data.item_id is not None:
            async with self.store.lock("items"):
                item = self.store.get("items", data.item_id)
                if item is not None:
                    await self.update_item(item.id, ItemPatch(inquiries=item.inquiries + 1))
        logger.info("Opened chat %s between %s and %s", chat.id, data.user_id1, data.user_id2)
        return chat, True

    async def update_chat(self, chat_id: int, patch: ChatPatch) -> Optional[Chat]:
        chat = self.store.get("chats", chat_id)
        if chat is None:
            return None
        updated = merge(chat, patch)
        self.store.put("chats", chat_id, updated)
        return updated

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------
    async def get_messages_by_chat_id(self, chat_id: int) -> List[Message]:
        messages = [m for m in self.store.all("messages") if m.chat_id == chat_id]
        return sorted(messages, key=lambda m: m.created_at)

    async def create_message(self, data: MessageCreate) -> Message:
        """Store a message and stamp its chat's ``last_message_at``."""
        message = self.store.create(
            "messages", lambda new_id: Message(id=new_id, created_at=utcnow(), **data.model_dump())
        )
        await self.update_chat(data.chat_id, ChatPatch(last_message_at=message.created_at))
        return message

    # ------------------------------------------------------------------
    # Disposal centers
    # ------------------------------------------------------------------
    async def get_disposal_center(self, center_id: int) -> Optional[DisposalCenter]:
        return self.store.get("disposal_centers", center_id)

    async def get_disposal_centers_by_type(self, center_type: str) -> List[DisposalCenter]:
        return [c for c in self.store.all("disposal_centers") if c.type == center_type]

    async def get_nearby_disposal_centers(
        self,
        latitude: Optional[float],
        longitude: Optional[float],
        radius_km: float,
        center_type: Optional[str] = None,
    ) -> List[DisposalCenter]:
        """Return centers, optionally by type and distance (same rules as listings)."""
        if center_type:
            centers = await self.get_disposal_centers_by_type(center_type)
        else:
            centers = self.store.all("disposal_centers")
        if latitude is not None and longitude is not None:
            centers = [
                c for c in centers
                if within_radius(latitude, longitude, radius_km, c.latitude, c.longitude)
            ]
        return centers

    async def create_disposal_center(self, data: DisposalCenterCreate) -> DisposalCenter:
        return self.store.create(
            "disposal_centers", lambda new_id: DisposalCenter(id=new_id, **data.model_dump())
        )

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    async def get_event(self, event_id: int) -> Optional[Event]:
        return self.store.get("events", event_id)

    async def get_upcoming_events(self) -> List[Event]:
        now = utcnow()
        upcoming = [e for e in self.store.all("events") if e.date > now]
        return sorted(upcoming, key=lambda e: e.date)

    async def create_event(self, data: EventCreate) -> Event:
        return self.store.create("events", lambda new_id: Event(id=new_id, **data.model_dump()))
