"""MongoDB-backed store using the pymongo async client."""

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import DuplicateKeyError, OperationFailure

from src.errors import ConflictError
from src.logging.audit import get_audit_logger
from src.store.base import Store
from src.store.models import Document, User


class MongoStore(Store):
    """Users and movies in the `users` and `movies` collections of one database."""

    USERS = "users"
    MOVIES = "movies"

    def __init__(self, uri: str, database_name: str = "test", unique_emails: bool = True):
        self._uri = uri
        self._database_name = database_name
        self._unique_emails = unique_emails
        self._client = None
        self._db = None
        self._users = None
        self._movies = None

    @property
    def database_name(self) -> str:
        return self._db.name if self._db is not None else self._database_name

    async def connect(self) -> None:
        from pymongo import AsyncMongoClient

        self._client = AsyncMongoClient(self._uri)
        try:
            self._bind(self._client.get_default_database(default=self._database_name))
            await self.ping()
            if self._unique_emails:
                await self._ensure_email_index()
        except Exception:
            await self._client.close()
            self._client = None
            raise

        get_audit_logger().info(
            "Connected to MongoDB",
            extra={"audit_data": {"database": self.database_name}},
        )

    async def _ensure_email_index(self) -> None:
        """Declare users.email unique. Existing duplicates leave the index unbuilt."""
        try:
            await self._users.create_index("email", unique=True)
        except OperationFailure as e:
            get_audit_logger().warning(
                "Unique email index not created; duplicate registrations remain possible",
                extra={"audit_data": {"error": str(e)}},
            )

    def _bind(self, db) -> None:
        self._db = db
        self._users = db[self.USERS]
        self._movies = db[self.MOVIES]

    async def close(self) -> None:
        if self._client is not None:
            await self._client.close()
            self._client = None

    async def ping(self) -> None:
        await self._db.command("ping")

    # --- users ---

    async def find_user_by_email(self, email: str) -> User | None:
        doc = await self._users.find_one({"email": email})
        return User.from_document(doc) if doc else None

    async def find_user_by_credentials(self, email: str, password: str) -> User | None:
        doc = await self._users.find_one({"email": email, "password": password})
        return User.from_document(doc) if doc else None

    async def insert_user(self, user: User) -> str:
        try:
            result = await self._users.insert_one(user.to_document())
        except DuplicateKeyError as e:
            raise ConflictError("User already exists with this email") from e
        return str(result.inserted_id)

    # --- movies ---

    async def list_movies(self) -> list[Document]:
        docs = await self._movies.find({}).to_list()
        return [_stringify_id(d) for d in docs]

    async def get_movie(self, movie_id: str) -> Document | None:
        try:
            oid = ObjectId(movie_id)
        except (InvalidId, TypeError):
            return None
        doc = await self._movies.find_one({"_id": oid})
        return _stringify_id(doc) if doc else None

    async def insert_movie(self, movie: Document) -> str:
        # insert_one adds "_id" to the dict it is given
        doc = {k: v for k, v in movie.items() if k != "_id"}
        result = await self._movies.insert_one(doc)
        return str(result.inserted_id)

    async def find_movies_by_genre(self, genre: str) -> list[Document]:
        docs = await self._movies.find({"genre": genre}).to_list()
        return [_stringify_id(d) for d in docs]


def _stringify_id(doc: Document) -> Document:
    """Render ObjectId keys as hex strings so documents are JSON-serializable."""
    out = dict(doc)
    if isinstance(out.get("_id"), ObjectId):
        out["_id"] = str(out["_id"])
    return out
