"""Built-in catalog seed data and the routine that writes it."""

from __future__ import annotations

import logging

from .storage import MOVIES_COLLECTION, TVSHOWS_COLLECTION, RecordStore

logger = logging.getLogger(__name__)

_POSTER = "https://images.unsplash.com/photo-{photo}?w=300&h=450&fit=crop&crop=center"
_BACKDROP = "https://images.unsplash.com/photo-{photo}?w=800&h=450&fit=crop&crop=center"


def _artwork(photo: str) -> dict[str, str]:
    return {
        "posterUrl": _POSTER.format(photo=photo),
        "backdropUrl": _BACKDROP.format(photo=photo),
    }


SEED_MOVIES: list[dict[str, object]] = [
    {
        "id": "13a07c8d-f360-42ff-80ff-59db8e779c1f",
        "title": "The Matrix",
        "description": "A computer programmer discovers that reality as he knows it is a simulation.",
        "genres": ["Action", "SciFi"],
        "releaseDate": "1999-03-31",
        "director": "The Wachowskis",
        "actors": ["Keanu Reeves", "Laurence Fishburne", "Carrie-Anne Moss"],
        **_artwork("1536440136628-849c177e76a1"),
    },
    {
        "id": "e1ad42f6-f0bf-470a-8820-b79eef7c1fe7",
        "title": "The Shawshank Redemption",
        "description": "Two imprisoned men bond over a number of years, finding solace and eventual redemption.",
        "genres": ["Drama"],
        "releaseDate": "1994-09-23",
        "director": "Frank Darabont",
        "actors": ["Tim Robbins", "Morgan Freeman"],
        **_artwork("1489599735734-79b4169c2a78"),
    },
    {
        "id": "f2be53c7-e1c8-4a1b-9f3d-8e4a5b6c7d8e",
        "title": "Inception",
        "description": "A thief who steals corporate secrets through dream-sharing technology.",
        "genres": ["Action", "SciFi", "Drama"],
        "releaseDate": "2010-07-16",
        "director": "Christopher Nolan",
        "actors": ["Leonardo DiCaprio", "Marion Cotillard", "Tom Hardy"],
        **_artwork("1440404653325-ab127d49abc1"),
    },
    {
        "id": "a3b4c5d6-e7f8-9a0b-1c2d-3e4f5a6b7c8d",
        "title": "The Princess Bride",
        "description": "A classic fairy tale adventure with romance, comedy, and sword fighting.",
        "genres": ["Romance", "Comedy", "Fantasy"],
        "releaseDate": "1987-09-25",
        "director": "Rob Reiner",
        "actors": ["Cary Elwes", "Robin Wright", "Mandy Patinkin"],
        **_artwork("1518709268805-4e9042af2176"),
    },
    {
        "id": "b4c5d6e7-f8a9-0b1c-2d3e-4f5a6b7c8d9e",
        "title": "Pulp Fiction",
        "description": "The lives of two mob hitmen, a boxer, and others intertwine in Los Angeles.",
        "genres": ["Drama", "Comedy"],
        "releaseDate": "1994-10-14",
        "director": "Quentin Tarantino",
        "actors": ["John Travolta", "Samuel L. Jackson", "Uma Thurman"],
        **_artwork("1594736797933-d0401ba2fe65"),
    },
]

SEED_TV_SHOWS: list[dict[str, object]] = [
    {
        "id": "3312dd2f-c0be-45f2-a0f2-d9347cc17fab",
        "title": "Breaking Bad",
        "description": "A high school chemistry teacher turned methamphetamine manufacturer.",
        "genres": ["Drama"],
        **_artwork("1574375927938-d5a98e8ffe85"),
        "episodes": [
            {
                "episodeNumber": 1,
                "seasonNumber": 1,
                "releaseDate": "2008-01-20",
                "director": "Vince Gilligan",
                "actors": ["Bryan Cranston", "Aaron Paul"],
            },
            {
                "episodeNumber": 2,
                "seasonNumber": 1,
                "releaseDate": "2008-01-27",
                "director": "Adam Bernstein",
                "actors": ["Bryan Cranston", "Aaron Paul"],
            },
        ],
    },
    {
        "id": "4423ee3f-d1cf-46f3-b1f3-ea48dd28fcbc",
        "title": "Stranger Things",
        "description": "A group of kids in a small town uncover supernatural mysteries.",
        "genres": ["SciFi", "Horror", "Drama"],
        **_artwork("1578662996442-48f60103fc96"),
        "episodes": [
            {
                "episodeNumber": 1,
                "seasonNumber": 1,
                "releaseDate": "2016-07-15",
                "director": "The Duffer Brothers",
                "actors": ["Millie Bobby Brown", "Finn Wolfhard", "David Harbour"],
            },
            {
                "episodeNumber": 2,
                "seasonNumber": 1,
                "releaseDate": "2016-07-15",
                "director": "The Duffer Brothers",
                "actors": ["Millie Bobby Brown", "Finn Wolfhard", "David Harbour"],
            },
        ],
    },
    {
        "id": "5534ff4a-e2d0-47a4-a2b4-fb59ee39adcd",
        "title": "The Office",
        "description": "A mockumentary about office employees in Scranton, Pennsylvania.",
        "genres": ["Comedy"],
        **_artwork("1497032628192-86f99bcd76bc"),
        "episodes": [
            {
                "episodeNumber": 1,
                "seasonNumber": 1,
                "releaseDate": "2005-03-24",
                "director": "Ken Kwapis",
                "actors": ["Steve Carell", "John Krasinski", "Jenna Fischer"],
            },
            {
                "episodeNumber": 2,
                "seasonNumber": 1,
                "releaseDate": "2005-03-29",
                "director": "Ken Kwapis",
                "actors": ["Steve Carell", "John Krasinski", "Jenna Fischer"],
            },
        ],
    },
]


async def seed_catalog(store: RecordStore, *, force: bool = False) -> bool:
    """Write the seed catalog; skipped when movies already exist unless forced."""

    if not force and await store.read_all(MOVIES_COLLECTION):
        logger.info("Catalog already populated; skipping seed")
        return False

    await store.write_all(MOVIES_COLLECTION, SEED_MOVIES)
    await store.write_all(TVSHOWS_COLLECTION, SEED_TV_SHOWS)
    logger.info(
        "Seeded catalog with %d movies and %d TV shows",
        len(SEED_MOVIES),
        len(SEED_TV_SHOWS),
    )
    return True
