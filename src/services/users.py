"""User registration and login."""

from src.config.settings import get_settings
from src.errors import AuthenticationError, ConflictError, ValidationError
from src.store.base import Store
from src.store.models import User


async def register_user(store: Store, body: dict) -> str:
    """Create a user from a registration body and return the new user id.

    Raises ValidationError for missing fields or a short password and
    ConflictError when the email is already registered. Nothing is written
    on either failure.
    """
    fullname = body.get("fullname")
    email = body.get("email")
    password = body.get("password")

    if not all(isinstance(v, str) for v in (fullname, email, password)):
        raise ValidationError("fullname, email and password are required")

    min_length = get_settings().min_password_length
    if len(password) < min_length:
        raise ValidationError(f"Password must be at least {min_length} characters long")

    if await store.find_user_by_email(email) is not None:
        raise ConflictError("User already exists with this email")

    return await store.insert_user(User(fullname=fullname, email=email, password=password))


async def login_user(store: Store, body: dict) -> User:
    """Return the user whose email and password both match exactly."""
    email = body.get("email")
    password = body.get("password")

    if not isinstance(email, str) or not isinstance(password, str):
        raise AuthenticationError("Invalid email or password")

    user = await store.find_user_by_credentials(email, password)
    if user is None:
        raise AuthenticationError("Invalid email or password")
    return user
