"""In-process store for local development and tests. Data is lost on restart."""

import copy

from bson import ObjectId

from src.errors import ConflictError
from src.store.base import Store
from src.store.models import Document, User


class MemoryStore(Store):
    """Dict-backed store that hands out ObjectId-style ids like MongoDB does."""

    def __init__(self):
        self._users: dict[str, User] = {}
        self._movies: dict[str, Document] = {}
        self._connected = False

    async def connect(self) -> None:
        self._connected = True

    async def close(self) -> None:
        self._connected = False

    async def ping(self) -> None:
        if not self._connected:
            raise ConnectionError("memory store is closed")

    async def find_user_by_email(self, email: str) -> User | None:
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    async def find_user_by_credentials(self, email: str, password: str) -> User | None:
        for user in self._users.values():
            if user.email == email and user.password == password:
                return user
        return None

    async def insert_user(self, user: User) -> str:
        # No await between the check and the insert, so this cannot race
        if await self.find_user_by_email(user.email) is not None:
            raise ConflictError("User already exists with this email")
        user_id = str(ObjectId())
        self._users[user_id] = user
        return user_id

    async def list_movies(self) -> list[Document]:
        return [copy.deepcopy(m) for m in self._movies.values()]

    async def get_movie(self, movie_id: str) -> Document | None:
        movie = self._movies.get(movie_id)
        return copy.deepcopy(movie) if movie is not None else None

    async def insert_movie(self, movie: Document) -> str:
        movie_id = str(ObjectId())
        doc = {"_id": movie_id}
        doc.update({k: copy.deepcopy(v) for k, v in movie.items() if k != "_id"})
        self._movies[movie_id] = doc
        return movie_id

    async def find_movies_by_genre(self, genre: str) -> list[Document]:
        return [copy.deepcopy(m) for m in self._movies.values() if _genre_matches(m.get("genre"), genre)]


def _genre_matches(value, genre: str) -> bool:
    """Equality, or membership when the stored genre is a list (as MongoDB matches arrays)."""
    if isinstance(value, list):
        return genre in value
    return value == genre
