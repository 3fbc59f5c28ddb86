"""Seed demo accounts and sample films.

Runs at startup in development so the three portals can be tried out with
known credentials. Seeding is skipped when the store already has users.
"""

import logging

from festival.models.enums import FilmStatus, Role
from festival.services.auth import get_password_hash
from festival.services.store import EntityStore

logger = logging.getLogger(__name__)

DEMO_USERS = [
    {
        "email": "admin@beverlyhillsfilmfest.com",
        "password": "admin123",
        "role": Role.ADMIN,
        "name": "Festival Admin",
    },
    {
        "email": "filmmaker@example.com",
        "password": "film123",
        "role": Role.SUBMITTER,
        "name": "John Filmmaker",
    },
    {
        "email": "buyer@example.com",
        "password": "buy123",
        "role": Role.BUYER,
        "name": "Jane Buyer",
    },
]

DEMO_FILMS = [
    {
        "title": "Sunset Boulevard Dreams",
        "director": "John Filmmaker",
        "synopsis": "A story about dreams and ambition in Hollywood.",
        "duration": 120,
        "genre": "Drama",
        "status": FilmStatus.APPROVED,
        "trailer_url": "https://example.com/trailer1",
        "poster_url": "/images/sunset-boulevard-dreams.jpg",
    },
    {
        "title": "Beverly Hills Nights",
        "director": "Sarah Director",
        "synopsis": "A comedy about life in Beverly Hills.",
        "duration": 95,
        "genre": "Comedy",
        "status": FilmStatus.PENDING,
    },
]


def seed_demo_data(store: EntityStore) -> bool:
    """Seed the store with demo data. Returns False if it was not empty."""
    if store.count_users():
        logger.info("Store already has users, skipping demo seed")
        return False

    users = {}
    for data in DEMO_USERS:
        user = store.create_user(
            email=data["email"],
            password_hash=get_password_hash(data["password"]),
            role=data["role"],
            name=data["name"],
        )
        users[user.role] = user

    for data in DEMO_FILMS:
        store.create_film(submitter_id=users[Role.SUBMITTER].id, **data)

    logger.info(f"Seeded {len(DEMO_USERS)} demo users and {len(DEMO_FILMS)} films")
    return True
