"""Movie catalog operations."""

from src.errors import NotFoundError, ValidationError
from src.store.base import Store
from src.store.models import Document


async def list_movies(store: Store) -> list[Document]:
    return await store.list_movies()


async def get_movie(store: Store, movie_id: str) -> Document:
    movie = await store.get_movie(movie_id)
    if movie is None:
        raise NotFoundError("Movie not found")
    return movie


async def add_movie(store: Store, body) -> str:
    """Store the body as-is and return the generated id."""
    if not isinstance(body, dict):
        raise ValidationError("Movie must be a JSON object")
    return await store.insert_movie(body)


async def movies_by_genre(store: Store, genre: str) -> list[Document]:
    # An unmatched genre is an empty list, not an error
    return await store.find_movies_by_genre(genre)
