"""Document store abstraction shared by the MongoDB and in-memory backends."""

from abc import ABC, abstractmethod

from src.store.models import Document, User


class Store(ABC):
    """One long-lived handle to the user and movie collections.

    Opened once with connect() at startup and released with close() at
    shutdown. Identifiers cross this boundary as strings.
    """

    @abstractmethod
    async def connect(self) -> None:
        """Open the connection and verify the store is reachable."""
        ...

    @abstractmethod
    async def close(self) -> None:
        ...

    @abstractmethod
    async def ping(self) -> None:
        """Raise if the store is unreachable."""
        ...

    # --- users ---

    @abstractmethod
    async def find_user_by_email(self, email: str) -> User | None:
        ...

    @abstractmethod
    async def find_user_by_credentials(self, email: str, password: str) -> User | None:
        """Exact match on both email and password. Returns None if not found."""
        ...

    @abstractmethod
    async def insert_user(self, user: User) -> str:
        """Insert a user and return its generated id.

        Raises ConflictError if the store rejects a duplicate email.
        """
        ...

    # --- movies ---

    @abstractmethod
    async def list_movies(self) -> list[Document]:
        ...

    @abstractmethod
    async def get_movie(self, movie_id: str) -> Document | None:
        """Point lookup. Returns None for unknown or malformed ids."""
        ...

    @abstractmethod
    async def insert_movie(self, movie: Document) -> str:
        ...

    @abstractmethod
    async def find_movies_by_genre(self, genre: str) -> list[Document]:
        """Movies whose genre equals `genre` exactly (case-sensitive)."""
        ...
