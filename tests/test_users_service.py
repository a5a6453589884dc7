"""Tests for src/services/users.py — register and login."""

from unittest.mock import AsyncMock

import pytest

from src.errors import AuthenticationError, ConflictError, ValidationError
from src.services.users import login_user, register_user


class TestRegister:

    async def test_success_returns_id(self, memory_store, registration_body):
        user_id = await register_user(memory_store, registration_body)
        assert user_id
        user = await memory_store.find_user_by_email("ada@example.com")
        assert user.password == "analytical"
        assert user.createdAt is not None

    @pytest.mark.parametrize("password", ["", "a", "1234567"])
    async def test_short_password_rejected_without_write(self, password, registration_body):
        store = AsyncMock()
        with pytest.raises(ValidationError, match="at least 8 characters"):
            await register_user(store, {**registration_body, "password": password})
        store.insert_user.assert_not_awaited()

    async def test_exactly_minimum_length_accepted(self, memory_store, registration_body):
        await register_user(memory_store, {**registration_body, "password": "12345678"})

    async def test_minimum_length_configurable(self, override_settings, memory_store, registration_body):
        override_settings(MIN_PASSWORD_LENGTH="12")
        with pytest.raises(ValidationError, match="at least 12 characters"):
            await register_user(memory_store, registration_body)

    @pytest.mark.parametrize("missing", ["fullname", "email", "password"])
    async def test_missing_field(self, missing, registration_body):
        store = AsyncMock()
        body = {k: v for k, v in registration_body.items() if k != missing}
        with pytest.raises(ValidationError):
            await register_user(store, body)
        store.insert_user.assert_not_awaited()

    async def test_non_string_password(self, registration_body):
        with pytest.raises(ValidationError):
            await register_user(AsyncMock(), {**registration_body, "password": 123456789})

    async def test_duplicate_email_rejected_without_write(self, registration_body):
        store = AsyncMock()
        store.find_user_by_email.return_value = object()
        with pytest.raises(ConflictError, match="already exists"):
            await register_user(store, registration_body)
        store.insert_user.assert_not_awaited()


class TestLogin:

    async def test_success(self, memory_store, sample_user):
        await memory_store.insert_user(sample_user)
        user = await login_user(memory_store, {"email": "ada@example.com", "password": "analytical"})
        assert user.public_profile() == {"fullname": "Ada Lovelace", "email": "ada@example.com"}

    @pytest.mark.parametrize("body", [
        {"email": "ada@example.com", "password": "wrong-password"},
        {"email": "eve@example.com", "password": "analytical"},
        {"email": "ada@example.com"},
        {},
    ])
    async def test_rejected(self, memory_store, sample_user, body):
        await memory_store.insert_user(sample_user)
        with pytest.raises(AuthenticationError):
            await login_user(memory_store, body)
