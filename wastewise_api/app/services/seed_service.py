"""
Sample data for a freshly started service.

Seeds a handful of disposal centers around San Francisco, a demo user
with five listings and three upcoming community events.  Everything
goes through the ``Storage`` facade so identifiers, counters and
GreenPoints are assigned exactly as for client-created data.
"""

import logging
from datetime import timedelta

from ..schemas.base import utcnow
from ..schemas.disposal_center import DisposalCenterCreate
from ..schemas.event import EventCreate
from ..schemas.item import ItemCreate
from ..schemas.user import UserCreate
from .storage import Storage

logger = logging.getLogger(__name__)

SF_LATITUDE = 37.7749
SF_LONGITUDE = -122.4194

DISPOSAL_CENTERS = [
    {
        "name": "GreenTech Recycling Center",
        "description": "E-waste recycling center accepting computers, phones, and batteries",
        "type": "e-waste",
        "address": "123 Green Street",
        "latitude": 37.7749,
        "longitude": -122.4194,
        "open_hours": "9AM - 6PM",
        "accepted_items": ["Computers", "Phones", "Batteries"],
        "contact_info": "info@greentech.example.com",
        "image": "https://images.unsplash.com/photo-1532996122724-e3c354a0b15b",
    },
    {
        "name": "EcoElectronics Depot",
        "description": "Electronics recycling center specializing in TVs and appliances",
        "type": "e-waste",
        "address": "456 Eco Avenue",
        "latitude": 37.7833,
        "longitude": -122.4167,
        "open_hours": "10AM - 8PM",
        "accepted_items": ["TVs", "Appliances", "Cables"],
        "contact_info": "info@ecoelectronics.example.com",
        "image": "https://images.unsplash.com/photo-1605600659873-d808a13e4d2a",
    },
    {
        "name": "City Recycling Hub",
        "description": "General recycling center accepting electronics and metals",
        "type": "e-waste",
        "address": "789 Recycle Road",
        "latitude": 37.7694,
        "longitude": -122.4862,
        "open_hours": "8AM - 5PM",
        "accepted_items": ["All Electronics", "Metals"],
        "contact_info": "info@cityrecycling.example.com",
        "image": "https://images.unsplash.com/photo-1567177662154-dfeb4c93b6ae",
    },
    {
        "name": "Furniture Donation Center",
        "description": "Accepts used furniture for redistribution to those in need",
        "type": "furniture",
        "address": "101 Donation Drive",
        "latitude": 37.7855,
        "longitude": -122.4071,
        "open_hours": "9AM - 4PM",
        "accepted_items": ["Chairs", "Tables", "Sofas", "Desks"],
        "contact_info": "info@furnituredonation.example.com",
        "image": "https://images.unsplash.com/photo-1555041469-a586c61ea9bc",
    },
]

DEMO_USER = {
    "username": "demouser",
    "password": "password123",
    "name": "Demo User",
    "email": "demo@example.com",
    "location": "San Francisco, CA",
    "profile_image": "https://images.unsplash.com/photo-1633332755192-727a05c4013d?w=400&h=400&fit=crop",
}

DEMO_ITEMS = [
    {
        "title": "Unused Kitchen Blender",
        "description": "Barely used kitchen blender in great condition. Free to a good home.",
        "category": "kitchen",
        "type": "donate",
        "images": ["https://images.unsplash.com/photo-1626806819282-2c1dc01a5e0c?w=400&h=300&fit=crop"],
        "tags": ["appliance", "kitchen", "blender"],
    },
    {
        "title": "Office Chair",
        "description": "Ergonomic office chair, adjustable height. Minor wear but still very comfortable.",
        "category": "furniture",
        "type": "sell",
        "price": 40,
        "images": ["https://images.unsplash.com/photo-1589384267710-7a170981ca78?w=400&h=300&fit=crop"],
        "tags": ["furniture", "office", "chair"],
    },
    {
        "title": "Surplus Organic Apples",
        "description": "Organic apples from my garden. Too many for me to eat!",
        "category": "food",
        "type": "donate",
        "images": ["https://images.unsplash.com/photo-1570913149827-d2ac84ab3f9a?w=400&h=300&fit=crop"],
        "tags": ["food", "organic", "fruit"],
    },
    {
        "title": "Unused Paint Cans",
        "description": "Leftover paint from home renovation. Various colors, water-based.",
        "category": "home_improvement",
        "type": "sell",
        "price": 50,
        "images": ["https://images.unsplash.com/photo-1589939705384-5185137a7f0f?w=400&h=300&fit=crop"],
        "tags": ["paint", "renovation", "home"],
    },
    {
        "title": "Children's Books",
        "description": "Collection of children's books in excellent condition. Suitable for ages 3-8.",
        "category": "books",
        "type": "donate",
        "images": ["https://images.unsplash.com/photo-1512820790803-83ca734da794?w=400&h=300&fit=crop"],
        "tags": ["books", "children", "education"],
    },
]

# (title, description, type, days ahead, location, lat, lon, reward, image)
DEMO_EVENTS = [
    (
        "E-Waste Collection Drive",
        "Community center is hosting an electronics recycling event this weekend. "
        "Bring your old devices and earn double GreenPoints!",
        "collection_drive",
        7,
        "City Community Center, 100 Main St",
        37.7855,
        -122.4071,
        20,
        "https://images.unsplash.com/photo-1532996122724-e3c354a0b15b",
    ),
    (
        "Neighborhood Clean-up Day",
        "Join us for a community clean-up event. We'll provide gloves and bags!",
        "cleanup",
        3,
        "Green Park, West Entrance",
        37.7695,
        -122.4830,
        15,
        "https://images.unsplash.com/photo-1567817886411-5d9c509e2b7e?w=800&h=600&fit=crop",
    ),
    (
        "Furniture Upcycling Workshop",
        "Learn how to transform old furniture into beautiful new pieces. Materials provided.",
        "workshop",
        14,
        "Design Center, 200 Innovation Blvd",
        37.7790,
        -122.4120,
        10,
        "https://images.unsplash.com/photo-1555041469-a586c61ea9bc?w=800&h=600&fit=crop",
    ),
]


async def seed_sample_data(storage: Storage) -> None:
    """Populate an empty store with demo data.

    Does nothing when the store already holds users, so restarting the
    seeding against a live store never duplicates records.
    """
    if storage.store.count("users") or storage.store.count("disposal_centers"):
        logger.info("Store already populated; skipping sample data")
        return

    for center in DISPOSAL_CENTERS:
        await storage.create_disposal_center(DisposalCenterCreate(**center))

    demo = await storage.register_user(UserCreate(**DEMO_USER))
    for item in DEMO_ITEMS:
        await storage.create_item(
            ItemCreate(
                user_id=demo.id,
                location=DEMO_USER["location"],
                latitude=SF_LATITUDE,
                longitude=SF_LONGITUDE,
                **item,
            )
        )

    now = utcnow()
    for title, description, kind, days, location, lat, lon, reward, image in DEMO_EVENTS:
        await storage.create_event(
            EventCreate(
                title=title,
                description=description,
                type=kind,
                date=now + timedelta(days=days),
                location=location,
                latitude=lat,
                longitude=lon,
                green_points_reward=reward,
                image=image,
            )
        )

    logger.info(
        "Seeded %d disposal centers, %d items and %d events",
        len(DISPOSAL_CENTERS),
        len(DEMO_ITEMS),
        len(DEMO_EVENTS),
    )
