"""
Seed the database with a sample catalog and one user's list.

Creates missing tables, inserts users, movies, TV shows with episodes, and
then adds list items for one user through MyListService, so the user's
cache version is bumped exactly as it would be through the API.

Usage:
======
    mylist-seed --users 10 --movies 200 --shows 50 --items 40
    mylist-seed --items 0            # catalog only
"""

import argparse
import asyncio
import random
import uuid
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from mylist.shared.cache import PageCache, VersionCache, build_cache_backend
from mylist.shared.core.exceptions import MyListException
from mylist.shared.core.logging import get_logger
from mylist.shared.db import close_db, get_sessionmaker, init_db
from mylist.shared.models import Episode, Movie, TVShow, User
from mylist.shared.models.enums import ContentType
from mylist.shared.schemas.mylist import AddItemRequest
from mylist.shared.services.mylist_service import MyListService


logger = get_logger(__name__)

GENRES = ["Action", "Comedy", "Drama", "Fantasy", "Horror", "Romance", "SciFi"]
WORDS = [
    "midnight", "river", "echo", "crown", "glass", "harbor", "signal",
    "ember", "atlas", "winter", "orbit", "hollow", "paper", "storm",
]


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Seed users, catalog and a sample list.")
    p.add_argument("--users", type=int, default=10, help="Users to create.")
    p.add_argument("--movies", type=int, default=200, help="Movies to create.")
    p.add_argument("--shows", type=int, default=50, help="TV shows to create.")
    p.add_argument("--max-episodes", type=int, default=8, help="Episodes per show (upper bound).")
    p.add_argument("--items", type=int, default=40, help="List items to add for one user.")
    p.add_argument(
        "--episode-prob",
        type=float,
        default=0.5,
        help="Chance a show item is pinned to one of its episodes.",
    )
    p.add_argument("--seed", type=int, default=None, help="Random seed for repeatable data.")
    return p


def _title(rng: random.Random, suffix: str) -> str:
    words = rng.sample(WORDS, rng.randint(1, 3))
    return f"{' '.join(words).title()} {suffix}"


def _genres(rng: random.Random) -> list[str]:
    return rng.sample(GENRES, rng.randint(1, 3))


async def seed_catalog(
    session: AsyncSession,
    rng: random.Random,
    users: int,
    movies: int,
    shows: int,
    max_episodes: int,
) -> tuple[list[User], list[Movie], list[TVShow]]:
    """Insert users, movies and shows with episodes."""
    # Usernames are unique; tag them so the script can run more than once
    run_tag = uuid.uuid4().hex[:6]
    user_rows = [
        User(
            username=f"{rng.choice(WORDS)}{i + 1}_{run_tag}",
            first_name=rng.choice(WORDS).title(),
            preferences={"favoriteGenres": _genres(rng), "dislikedGenres": []},
        )
        for i in range(users)
    ]
    movie_rows = [
        Movie(
            title=_title(rng, str(i + 1)),
            description=f"A story about {rng.choice(WORDS)} and {rng.choice(WORDS)}.",
            genres=_genres(rng),
            poster_url=f"https://picsum.photos/seed/movie{i + 1}/300/450",
            duration_minutes=rng.randint(80, 180),
        )
        for i in range(movies)
    ]
    show_rows = [
        TVShow(
            title=_title(rng, f"Series {i + 1}"),
            description=f"A series about {rng.choice(WORDS)}.",
            genres=_genres(rng),
            poster_url=f"https://picsum.photos/seed/show{i + 1}/300/450",
            seasons=rng.randint(1, 8),
        )
        for i in range(shows)
    ]
    session.add_all(user_rows + movie_rows + show_rows)
    await session.flush()

    for show in show_rows:
        for number in range(1, rng.randint(1, max(1, max_episodes)) + 1):
            session.add(
                Episode(
                    show_id=show.id,
                    season=1,
                    episode_number=number,
                    title=f"Episode {number}",
                    duration_minutes=rng.randint(20, 60),
                )
            )

    await session.commit()
    logger.info("Catalog seeded", users=users, movies=movies, shows=shows)
    return user_rows, movie_rows, show_rows


async def seed_list(
    service: MyListService,
    session: AsyncSession,
    rng: random.Random,
    user: User,
    movies: list[Movie],
    shows: list[TVShow],
    items: int,
    episode_prob: float,
) -> int:
    """Add up to `items` distinct titles to one user's list."""
    candidates: list[tuple[ContentType, Any]] = [(ContentType.MOVIE, m) for m in movies]
    candidates += [(ContentType.SHOW, s) for s in shows]
    rng.shuffle(candidates)

    added = 0
    for content_type, content in candidates[:items]:
        episode_id: Optional[str] = None
        if content_type == ContentType.SHOW and rng.random() < episode_prob:
            await session.refresh(content, ["episodes"])
            if content.episodes:
                episode_id = str(rng.choice(content.episodes).id)

        request = AddItemRequest(
            content_id=str(content.id),
            content_type=content_type,
            episode_id=episode_id,
        )
        try:
            _, created = await service.add_item(str(user.id), request)
        except MyListException as e:
            logger.warning("Skipping list item", error_code=e.error_code, message=e.message)
            continue
        added += int(created)

    logger.info("List seeded", user_id=str(user.id), items=added)
    return added


async def _run(args: argparse.Namespace) -> int:
    rng = random.Random(args.seed)
    await init_db(create_tables=True)

    backend = build_cache_backend()
    try:
        async with get_sessionmaker()() as session:
            users, movies, shows = await seed_catalog(
                session, rng, args.users, args.movies, args.shows, args.max_episodes
            )
            if args.items > 0 and users and (movies or shows):
                service = MyListService(session, VersionCache(backend), PageCache(backend))
                user = rng.choice(users)
                await seed_list(
                    service, session, rng, user, movies, shows, args.items, args.episode_prob
                )
                print(f"Seeded list for user {user.id}")
    finally:
        await backend.close()
        await close_db()
    return 0


def main() -> None:
    args = _build_parser().parse_args()
    raise SystemExit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
