from wastewise_api.app.schemas.item import ItemCreate
from wastewise_api.app.schemas.user import UserCreate


def user_payload(username, **overrides):
    payload = {
        "username": username,
        "password": f"{username}-pw",
        "name": username.title(),
        "email": f"{username}@example.com",
        "location": "San Francisco, CA",
    }
    payload.update(overrides)
    return payload


def item_payload(user_id, **overrides):
    payload = {
        "userId": user_id,
        "title": "Office Chair",
        "description": "Ergonomic chair",
        "category": "furniture",
        "type": "sell",
        "price": 40,
        "location": "San Francisco, CA",
        "latitude": 37.7749,
        "longitude": -122.4194,
    }
    payload.update(overrides)
    return payload


def make_user(run, storage, username):
    return run(storage.create_user(UserCreate(**user_payload(username))))


def make_item(run, storage, user_id, **overrides):
    return run(storage.create_item(ItemCreate(**item_payload(user_id, **overrides))))
