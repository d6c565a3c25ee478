from datetime import timedelta

import pytest

from wastewise_api.app.core.errors import DuplicateUsername, InvalidPayload
from wastewise_api.app.core.security import verify_password
from wastewise_api.app.schemas.base import utcnow
from wastewise_api.app.schemas.chat import ChatCreate, ChatPatch
from wastewise_api.app.schemas.disposal_center import DisposalCenterCreate
from wastewise_api.app.schemas.event import EventCreate
from wastewise_api.app.schemas.item import ItemPatch
from wastewise_api.app.schemas.message import MessageCreate
from wastewise_api.app.schemas.user import UserCreate, UserPatch
from wastewise_api.app.services.storage import DONATION_BONUS_POINTS

from .helpers import make_item, make_user, user_payload


def center(name, kind, lat, lon):
    return DisposalCenterCreate(name=name, type=kind, address="1 Main St", latitude=lat, longitude=lon)


def event(title, when):
    return EventCreate(title=title, description="d", type="workshop", date=when, location="Hall")


class TestUsers:
    def test_create_defaults_counters_and_hashes_password(self, run, storage):
        user = make_user(run, storage, "alice")
        assert user.id == 1
        assert (user.green_points, user.items_shared, user.items_recycled) == (0, 0, 0)
        assert (user.donations_made, user.co2_saved) == (0, 0.0)
        assert user.password != "alice-pw"
        assert verify_password("alice-pw", user.password)

    def test_ids_strictly_increase(self, run, storage):
        ids = [make_user(run, storage, name).id for name in ("a", "b", "c")]
        assert ids == sorted(ids) and len(set(ids)) == 3

    def test_get_by_username_and_missing_lookups(self, run, storage):
        alice = make_user(run, storage, "alice")
        assert run(storage.get_user_by_username("alice")).id == alice.id
        assert run(storage.get_user_by_username("nobody")) is None
        assert run(storage.get_user(999)) is None

    def test_register_rejects_duplicate_username_before_create(self, run, storage):
        run(storage.register_user(UserCreate(**user_payload("alice"))))
        with pytest.raises(DuplicateUsername):
            run(storage.register_user(UserCreate(**user_payload("alice", name="Other"))))
        assert storage.store.count("users") == 1
        # The failed attempt did not consume an identifier.
        assert make_user(run, storage, "bob").id == 2

    def test_update_merges_only_given_fields(self, run, storage):
        alice = make_user(run, storage, "alice")
        updated = run(storage.update_user(alice.id, UserPatch(bio="hi", green_points=7)))
        assert updated.bio == "hi"
        assert updated.green_points == 7
        assert updated.name == alice.name
        assert run(storage.get_user(alice.id)).bio == "hi"

    def test_update_hashes_new_password(self, run, storage):
        alice = make_user(run, storage, "alice")
        updated = run(storage.update_user(alice.id, UserPatch(password="new-secret")))
        assert verify_password("new-secret", updated.password)

    def test_update_unknown_user_returns_none(self, run, storage):
        assert run(storage.update_user(42, UserPatch(bio="x"))) is None

    def test_update_that_breaks_the_record_is_rejected(self, run, storage):
        alice = make_user(run, storage, "alice")
        with pytest.raises(InvalidPayload) as excinfo:
            run(storage.update_user(alice.id, UserPatch(name=None)))
        assert excinfo.value.errors[0]["path"] == ["name"]
        assert run(storage.get_user(alice.id)).name == alice.name


class TestItems:
    def test_donation_credits_owner(self, run, storage):
        alice = make_user(run, storage, "alice")
        before = run(storage.get_user(alice.id))
        item = make_item(run, storage, alice.id, type="donate", price=15)
        after = run(storage.get_user(alice.id))
        assert item.price is None
        assert after.items_shared == before.items_shared + 1
        assert after.donations_made == before.donations_made + 1
        assert after.green_points == before.green_points + DONATION_BONUS_POINTS == 10

    def test_sale_only_counts_as_shared(self, run, storage):
        alice = make_user(run, storage, "alice")
        item = make_item(run, storage, alice.id, type="sell", price=40)
        after = run(storage.get_user(alice.id))
        assert item.price == 40
        assert after.items_shared == 1
        assert after.donations_made == 0
        assert after.green_points == 0

    def test_item_defaults(self, run, storage):
        alice = make_user(run, storage, "alice")
        item = make_item(run, storage, alice.id)
        assert (item.status, item.views, item.inquiries) == ("available", 0, 0)
        assert item.created_at <= utcnow()

    def test_item_for_unknown_owner_is_still_stored(self, run, storage):
        item = make_item(run, storage, 77)
        assert run(storage.get_item(item.id)) == item

    def test_items_by_user(self, run, storage):
        alice = make_user(run, storage, "alice")
        bob = make_user(run, storage, "bob")
        a1 = make_item(run, storage, alice.id)
        make_item(run, storage, bob.id)
        a2 = make_item(run, storage, alice.id, status="completed")
        assert [i.id for i in run(storage.get_items_by_user_id(alice.id))] == [a1.id, a2.id]

    def test_nearby_filters_status_category_and_distance(self, run, storage):
        alice = make_user(run, storage, "alice")
        downtown = make_item(run, storage, alice.id, category="furniture")
        books = make_item(run, storage, alice.id, category="books")
        make_item(run, storage, alice.id, status="reserved")
        oakland = make_item(run, storage, alice.id, latitude=37.8044, longitude=-122.2712)
        nowhere = make_item(run, storage, alice.id, latitude=None, longitude=None)

        everything = run(storage.get_nearby_items(None, None, 5))
        assert [i.id for i in everything] == [downtown.id, books.id, oakland.id, nowhere.id]

        by_category = run(storage.get_nearby_items(None, None, 5, "books"))
        assert [i.id for i in by_category] == [books.id]
        assert len(run(storage.get_nearby_items(None, None, 5, "All"))) == 4

        near = run(storage.get_nearby_items(37.7749, -122.4194, 5))
        assert [i.id for i in near] == [downtown.id, books.id]
        wide = run(storage.get_nearby_items(37.7749, -122.4194, 50))
        assert [i.id for i in wide] == [downtown.id, books.id, oakland.id]

    def test_update_and_view_counter(self, run, storage):
        alice = make_user(run, storage, "alice")
        item = make_item(run, storage, alice.id)
        assert run(storage.update_item(item.id, ItemPatch(status="reserved"))).status == "reserved"
        assert run(storage.record_item_view(item.id)).views == 1
        assert run(storage.record_item_view(item.id)).views == 2
        assert run(storage.record_item_view(999)) is None
        assert run(storage.update_item(999, ItemPatch(title="x"))) is None

    def test_switching_to_donation_clears_price(self, run, storage):
        alice = make_user(run, storage, "alice")
        item = make_item(run, storage, alice.id, type="sell", price=40)
        updated = run(storage.update_item(item.id, ItemPatch(type="donate")))
        assert updated.price is None

    def test_delete(self, run, storage):
        alice = make_user(run, storage, "alice")
        item = make_item(run, storage, alice.id)
        assert run(storage.delete_item(item.id)) is True
        assert run(storage.get_item(item.id)) is None
        assert run(storage.delete_item(item.id)) is False


class TestChatsAndMessages:
    def test_chats_by_user_match_either_participant(self, run, storage):
        a, b, c = (make_user(run, storage, n) for n in ("a", "b", "c"))
        ab = run(storage.create_chat(ChatCreate(user_id1=a.id, user_id2=b.id)))
        bc = run(storage.create_chat(ChatCreate(user_id1=b.id, user_id2=c.id)))
        assert [ch.id for ch in run(storage.get_chats_by_user_id(a.id))] == [ab.id]
        assert [ch.id for ch in run(storage.get_chats_by_user_id(b.id))] == [ab.id, bc.id]
        assert [ch.id for ch in run(storage.get_chats_by_user_id(c.id))] == [bc.id]
        assert run(storage.get_chats_by_user_id(999)) == []

    def test_find_or_create_is_idempotent_per_pair_and_item(self, run, storage):
        alice = make_user(run, storage, "alice")
        bob = make_user(run, storage, "bob")
        item = make_item(run, storage, alice.id, type="donate")

        chat, created = run(storage.find_or_create_chat(ChatCreate(user_id1=bob.id, user_id2=alice.id, item_id=item.id)))
        assert created
        again, created_again = run(storage.find_or_create_chat(ChatCreate(user_id1=alice.id, user_id2=bob.id, item_id=item.id)))
        assert not created_again
        assert again.id == chat.id
        assert run(storage.get_item(item.id)).inquiries == 1

        other, created_other = run(storage.find_or_create_chat(ChatCreate(user_id1=bob.id, user_id2=alice.id)))
        assert created_other and other.id != chat.id
        assert run(storage.get_item(item.id)).inquiries == 1

    def test_update_chat(self, run, storage):
        a, b = make_user(run, storage, "a"), make_user(run, storage, "b")
        chat = run(storage.create_chat(ChatCreate(user_id1=a.id, user_id2=b.id)))
        when = utcnow() + timedelta(hours=1)
        assert run(storage.update_chat(chat.id, ChatPatch(last_message_at=when))).last_message_at == when
        assert run(storage.update_chat(999, ChatPatch(last_message_at=when))) is None

    def test_message_sets_chat_activity_exactly(self, run, storage):
        a, b = make_user(run, storage, "a"), make_user(run, storage, "b")
        chat = run(storage.create_chat(ChatCreate(user_id1=a.id, user_id2=b.id)))
        message = run(storage.create_message(MessageCreate(chat_id=chat.id, sender_id=a.id, content="hi")))
        assert run(storage.get_chat(chat.id)).last_message_at == message.created_at

    def test_messages_sorted_by_creation_time(self, run, storage):
        a, b = make_user(run, storage, "a"), make_user(run, storage, "b")
        first = run(storage.create_chat(ChatCreate(user_id1=a.id, user_id2=b.id)))
        second = run(storage.create_chat(ChatCreate(user_id1=a.id, user_id2=b.id, item_id=5)))
        for n in range(6):
            target = first if n % 2 == 0 else second
            run(storage.create_message(MessageCreate(chat_id=target.id, sender_id=a.id, content=f"m{n}")))

        messages = run(storage.get_messages_by_chat_id(first.id))
        assert [m.content for m in messages] == ["m0", "m2", "m4"]
        stamps = [m.created_at for m in messages]
        assert stamps == sorted(stamps)
        assert run(storage.get_messages_by_chat_id(999)) == []


class TestReferenceData:
    def test_disposal_centers_by_type_and_distance(self, run, storage):
        green = run(storage.create_disposal_center(center("GreenTech", "e-waste", 37.7749, -122.4194)))
        hub = run(storage.create_disposal_center(center("City Hub", "e-waste", 37.7694, -122.4862)))
        sofa = run(storage.create_disposal_center(center("Sofa Depot", "furniture", 37.7855, -122.4071)))

        assert run(storage.get_disposal_center(sofa.id)) == sofa
        assert run(storage.get_disposal_center(999)) is None
        assert [c.id for c in run(storage.get_disposal_centers_by_type("e-waste"))] == [green.id, hub.id]
        assert len(run(storage.get_nearby_disposal_centers(None, None, 5))) == 3
        assert [c.id for c in run(storage.get_nearby_disposal_centers(None, None, 5, "furniture"))] == [sofa.id]
        near = run(storage.get_nearby_disposal_centers(37.7749, -122.4194, 5, "e-waste"))
        assert [c.id for c in near] == [green.id]

    def test_upcoming_events_exclude_past_and_sort_ascending(self, run, storage):
        now = utcnow()
        run(storage.create_event(event("past", now - timedelta(days=1))))
        later = run(storage.create_event(event("later", now + timedelta(days=14))))
        soon = run(storage.create_event(event("soon", now + timedelta(days=3))))

        upcoming = run(storage.get_upcoming_events())
        assert [e.id for e in upcoming] == [soon.id, later.id]
        assert run(storage.get_event(later.id)) == later
        assert run(storage.get_event(999)) is None
