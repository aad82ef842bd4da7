from typing import Any

from fastapi import APIRouter, Request
from strawberry.fastapi import GraphQLRouter

from ..core.config import settings
from .context import build_context
from .schema import schema


async def get_context(request: Request) -> dict[str, Any]:
    return build_context(request.app.state.services, request=request)


graphql_app = GraphQLRouter(schema, context_getter=get_context)
router = APIRouter()
router.include_router(graphql_app, prefix=settings.GRAPHQL_PATH)
