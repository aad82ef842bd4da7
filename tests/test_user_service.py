import asyncio

import pytest

from quizgraph.core.errors import DuplicateUserError, InvalidCredentialsError, ValidationError
from quizgraph.repositories.base import USERS


class TestRegister:
    async def test_register_returns_token_for_new_user(self, services, store):
        token = await services.users.register("ann", "ann@example.com", "pw")

        user = await store.find_one(USERS, {"email": "ann@example.com"})
        assert token
        assert services.identity.read_token(token) == user["id"]
        assert user["username"] == "ann"
        assert user["password"] != "pw"

    async def test_second_registration_with_same_email_fails(self, services, store):
        assert await services.users.register("ann", "ann@example.com", "pw")

        with pytest.raises(DuplicateUserError, match="User with this email address already exists"):
            await services.users.register("other", "ann@example.com", "pw2")

        assert len(await store.find(USERS, {})) == 1

    async def test_store_level_duplicate_reported_as_duplicate_user(self, services, store):
        # Simulates losing the race: the existence check misses the other row.
        async def find_nothing(collection, filters):
            return None

        await store.insert(USERS, {"username": "x", "email": "race@example.com", "password": "h"})
        store.find_one = find_nothing

        with pytest.raises(DuplicateUserError):
            await services.users.register("y", "race@example.com", "pw")

    async def test_missing_fields_rejected(self, services, store):
        with pytest.raises(ValidationError):
            await services.users.register("ann", None, "pw")

        assert await store.find(USERS, {}) == []


class TestLogin:
    async def test_login_with_correct_credentials(self, services):
        await services.users.register("ann", "ann@example.com", "pw")

        token = await services.users.login("ann@example.com", "pw")

        user = await services.users.user_from_token(token)
        assert user["email"] == "ann@example.com"

    async def test_wrong_password_and_unknown_email_are_indistinguishable(self, services):
        await services.users.register("ann", "ann@example.com", "pw")

        with pytest.raises(InvalidCredentialsError) as wrong_pw:
            await services.users.login("ann@example.com", "nope")
        with pytest.raises(InvalidCredentialsError) as no_user:
            await services.users.login("ghost@example.com", "pw")

        assert str(wrong_pw.value) == str(no_user.value) == "Invalid Credentials"

    async def test_unknown_email_still_runs_a_comparison(self, services, monkeypatch):
        calls = []
        real_verify = services.identity.verify

        async def spy(plaintext, hashed):
            calls.append(hashed)
            return await real_verify(plaintext, hashed)

        monkeypatch.setattr(services.identity, "verify", spy)

        with pytest.raises(InvalidCredentialsError):
            await services.users.login("ghost@example.com", "pw")

        assert calls == [None]

    async def test_password_checks_do_not_block_the_event_loop(self, services):
        await services.users.register("ann", "ann@example.com", "pw")
        stalls = []
        done = asyncio.Event()

        async def ticker():
            loop = asyncio.get_running_loop()
            while not done.is_set():
                before = loop.time()
                await asyncio.sleep(0.001)
                stalls.append(loop.time() - before)

        task = asyncio.create_task(ticker())
        await asyncio.sleep(0)
        try:
            await services.users.login("ann@example.com", "pw")
            with pytest.raises(InvalidCredentialsError):
                await services.users.login("ghost@example.com", "pw")
        finally:
            done.set()
            await task

        assert len(stalls) > 5
        assert max(stalls) < 0.1
