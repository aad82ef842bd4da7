from typing import List, Optional

from ..core.logging import get_logger
from ..repositories.base import QUESTIONS, QUIZZES, EntityStore
from ..schemas.common import parse_input
from ..schemas.quiz_schemas import QuizCreateIn
from .slug_service import SlugGenerator

logger = get_logger(__name__)


class QuizService:
    def __init__(self, store: EntityStore, slugs: SlugGenerator) -> None:
        self.store = store
        self.slugs = slugs

    async def create_quiz(
        self,
        title: Optional[str],
        description: Optional[str],
        user_id: Optional[str],
        questions: Optional[List[dict]],
    ) -> str:
        """
        Create a quiz with its questions and return the quiz slug.

        All input is validated before the first write. Questions are written
        in one batch after the quiz; if that batch fails the quiz is removed
        again so it never shows up with a partial question set.
        """
        payload = parse_input(
            QuizCreateIn,
            {"title": title, "description": description, "userId": user_id, "questions": questions},
        )

        quiz = await self.slugs.insert_with_unique_slug(
            {
                "title": payload.title,
                "description": payload.description,
                "user_id": payload.user_id,
            },
            payload.title,
        )

        rows = [
            {
                "quiz_id": quiz["id"],
                "title": q.title,
                "correct_answer": q.correct_answer,
                "order": q.order,
            }
            for q in payload.questions
        ]
        try:
            await self.store.insert_many(QUESTIONS, rows)
        except Exception:
            await self._discard_quiz(quiz["id"])
            raise

        logger.info("Quiz created", quiz_id=quiz["id"], slug=quiz["slug"], questions=len(rows))
        return quiz["slug"]

    async def _discard_quiz(self, quiz_id) -> None:
        try:
            await self.store.delete(QUESTIONS, {"quiz_id": quiz_id})
            await self.store.delete(QUIZZES, {"id": quiz_id})
        except Exception:
            logger.exception("Failed to remove partially created quiz", quiz_id=quiz_id)
        else:
            logger.warning("Removed partially created quiz", quiz_id=quiz_id)

    async def get_quiz(self, quiz_id) -> Optional[dict]:
        return await self.store.find_by_id(QUIZZES, quiz_id)

    async def get_quiz_by_slug(self, slug: str) -> Optional[dict]:
        return await self.store.find_one(QUIZZES, {"slug": slug})

    async def list_quizzes(self) -> List[dict]:
        return await self.store.find(QUIZZES, {})

    async def quizzes_for_user(self, user_id) -> List[dict]:
        return await self.store.find(QUIZZES, {"user_id": user_id})

    async def questions_for_quiz(self, quiz_id) -> List[dict]:
        return await self.store.find(QUESTIONS, {"quiz_id": quiz_id})

    async def get_question(self, question_id) -> Optional[dict]:
        return await self.store.find_by_id(QUESTIONS, question_id)
