from abc import ABC, abstractmethod
from typing import Any, List, Mapping, Optional

USERS = "users"
QUIZZES = "quizzes"
QUESTIONS = "questions"

COLLECTIONS = (USERS, QUIZZES, QUESTIONS)

# Columns with a store-level unique constraint.
UNIQUE_KEYS: dict[str, tuple[str, ...]] = {
    USERS: ("email",),
    QUIZZES: ("slug",),
    QUESTIONS: (),
}


class EntityStore(ABC):
    """
    Durable collections of users, quizzes and questions.

    Rows are plain dicts with snake_case keys and a store-assigned ``id``.
    There are no transactions across collections; ``insert_many`` is atomic
    within one collection. Inserts violating ``UNIQUE_KEYS`` raise
    ``DuplicateKeyError``.
    """

    @abstractmethod
    async def find_one(self, collection: str, filters: Mapping[str, Any]) -> Optional[dict]:
        ...

    @abstractmethod
    async def find(self, collection: str, filters: Mapping[str, Any]) -> List[dict]:
        ...

    @abstractmethod
    async def find_by_id(self, collection: str, entity_id: Any) -> Optional[dict]:
        ...

    @abstractmethod
    async def insert(self, collection: str, entity: Mapping[str, Any]) -> dict:
        ...

    @abstractmethod
    async def insert_many(self, collection: str, entities: List[Mapping[str, Any]]) -> List[dict]:
        ...

    @abstractmethod
    async def delete(self, collection: str, filters: Mapping[str, Any]) -> int:
        ...

    async def close(self) -> None:
        return None
