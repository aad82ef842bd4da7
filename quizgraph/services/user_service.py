from typing import List, Optional

from ..core.errors import DuplicateKeyError, DuplicateUserError, InvalidCredentialsError
from ..core.logging import get_logger
from ..repositories.base import USERS, EntityStore
from ..schemas.common import parse_input
from ..schemas.user_schemas import LoginIn, RegisterIn
from .identity_service import IdentityService

logger = get_logger(__name__)


class UserService:
    def __init__(self, store: EntityStore, identity: IdentityService) -> None:
        self.store = store
        self.identity = identity

    async def register(self, username: Optional[str], email: Optional[str], password: Optional[str]) -> str:
        payload = parse_input(RegisterIn, {"username": username, "email": email, "password": password})

        if await self.store.find_one(USERS, {"email": payload.email}) is not None:
            raise DuplicateUserError()

        try:
            user = await self.store.insert(
                USERS,
                {
                    "username": payload.username,
                    "email": payload.email,
                    "password": await self.identity.hash(payload.password),
                },
            )
        except DuplicateKeyError as e:
            # Lost the race against a concurrent registration with this email.
            raise DuplicateUserError() from e

        logger.info("User registered", user_id=user["id"])
        return self.identity.issue_token(user)

    async def login(self, email: Optional[str], password: Optional[str]) -> str:
        payload = parse_input(LoginIn, {"email": email, "password": password})

        user = await self.store.find_one(USERS, {"email": payload.email})
        hashed = user.get("password") if user else None
        correct = await self.identity.verify(payload.password, hashed)

        if not user or not correct:
            logger.info("Login failed")
            raise InvalidCredentialsError()

        return self.identity.issue_token(user)

    async def get_user(self, user_id) -> Optional[dict]:
        return await self.store.find_by_id(USERS, user_id)

    async def list_users(self) -> List[dict]:
        return await self.store.find(USERS, {})

    async def user_from_token(self, token: Optional[str]) -> Optional[dict]:
        if not token:
            return None
        return await self.get_user(self.identity.read_token(token))
