from datetime import timedelta

from wastewise_api.app.schemas.base import utcnow
from wastewise_api.app.schemas.chat import ChatCreate, ChatPatch
from wastewise_api.app.schemas.message import MessageCreate
from wastewise_api.app.services.chat_view_service import ChatViewService

from .helpers import make_item, make_user


def test_enriched_chats_carry_last_message_counterpart_and_item(run, storage):
    alice = make_user(run, storage, "alice")
    bob = make_user(run, storage, "bob")
    item = make_item(run, storage, alice.id, images=["https://img.example/chair.jpg"])
    chat = run(storage.create_chat(ChatCreate(user_id1=bob.id, user_id2=alice.id, item_id=item.id)))
    run(storage.create_message(MessageCreate(chat_id=chat.id, sender_id=bob.id, content="still free?")))
    last = run(storage.create_message(MessageCreate(chat_id=chat.id, sender_id=alice.id, content="yes")))

    [view] = run(ChatViewService(storage).build_enriched_chats(alice.id))

    assert view.id == chat.id
    assert view.last_message.id == last.id
    assert view.other_user.id == bob.id
    assert view.other_user.name == bob.name
    assert view.item.id == item.id
    assert view.item.images == ["https://img.example/chair.jpg"]

    body = view.to_json()
    assert "password" not in body["otherUser"]
    assert set(body["otherUser"]) == {"id", "name", "profileImage"}
    assert set(body["item"]) == {"id", "title", "images"}


def test_missing_counterpart_item_and_messages_are_none(run, storage):
    alice = make_user(run, storage, "alice")
    chat = run(storage.create_chat(ChatCreate(user_id1=alice.id, user_id2=404, item_id=505)))

    [view] = run(ChatViewService(storage).build_enriched_chats(alice.id))

    assert view.id == chat.id
    assert view.last_message is None
    assert view.other_user is None
    assert view.item is None


def test_sorted_by_recent_activity_with_inactive_chats_last(run, storage):
    a, b, c, d = (make_user(run, storage, n) for n in ("a", "b", "c", "d"))
    old = run(storage.create_chat(ChatCreate(user_id1=a.id, user_id2=b.id)))
    fresh = run(storage.create_chat(ChatCreate(user_id1=a.id, user_id2=c.id)))
    idle = run(storage.create_chat(ChatCreate(user_id1=d.id, user_id2=a.id)))

    now = utcnow()
    run(storage.update_chat(old.id, ChatPatch(last_message_at=now - timedelta(days=2))))
    run(storage.update_chat(fresh.id, ChatPatch(last_message_at=now)))
    run(storage.update_chat(idle.id, ChatPatch(last_message_at=None)))

    views = run(ChatViewService(storage).build_enriched_chats(a.id))

    assert [v.id for v in views] == [fresh.id, old.id, idle.id]
    assert views[2].other_user.id == d.id


def test_only_the_users_chats_are_included(run, storage):
    a, b, c = (make_user(run, storage, n) for n in ("a", "b", "c"))
    run(storage.create_chat(ChatCreate(user_id1=b.id, user_id2=c.id)))
    assert run(ChatViewService(storage).build_enriched_chats(a.id)) == []
