from dataclasses import dataclass
from typing import Any, Optional

import strawberry

from ..core.config import Settings
from ..repositories.base import EntityStore
from ..services.identity_service import IdentityService
from ..services.quiz_service import QuizService
from ..services.slug_service import SlugGenerator
from ..services.user_service import UserService


@dataclass(frozen=True)
class Services:
    store: EntityStore
    identity: IdentityService
    users: UserService
    quizzes: QuizService


def build_services(store: EntityStore, settings: Settings) -> Services:
    identity = IdentityService(
        secret_key=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        issuer=settings.JWT_ISSUER,
        token_ttl_minutes=settings.TOKEN_TTL_MINUTES,
    )
    slugs = SlugGenerator(
        store,
        suffix_range=settings.SLUG_SUFFIX_RANGE,
        max_attempts=settings.SLUG_MAX_ATTEMPTS,
    )
    return Services(
        store=store,
        identity=identity,
        users=UserService(store, identity),
        quizzes=QuizService(store, slugs),
    )


def build_context(services: Services, request: Optional[Any] = None) -> dict[str, Any]:
    return {"request": request, "services": services}


def get_services(info: strawberry.Info) -> Services:
    return info.context["services"]


def get_bearer_token(info: strawberry.Info) -> Optional[str]:
    request = info.context.get("request")
    if request is None:
        return info.context.get("token")
    header = request.headers.get("authorization")
    if header and header.lower().startswith("bearer "):
        return header[7:].strip() or None
    return None
