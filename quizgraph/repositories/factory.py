from ..core.config import Settings
from ..core.logging import get_logger
from .base import QUESTIONS, QUIZZES, USERS, EntityStore
from .memory_store import MemoryStore

logger = get_logger(__name__)


async def create_store(settings: Settings) -> EntityStore:
    """Build the entity store selected by ``settings.STORE_BACKEND``."""
    if settings.STORE_BACKEND == "supabase":
        from ..core.supabase_client import get_supabase
        from .supabase_store import SupabaseStore

        client = await get_supabase()
        logger.info("Entity store selected", backend="supabase", schema=settings.SUPABASE_SCHEMA)
        return SupabaseStore(
            client,
            tables={
                USERS: settings.USERS_TABLE,
                QUIZZES: settings.QUIZZES_TABLE,
                QUESTIONS: settings.QUESTIONS_TABLE,
            },
        )

    logger.info("Entity store selected", backend="memory")
    return MemoryStore()
