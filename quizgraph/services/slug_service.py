import random
import re
from typing import Any, Mapping, Optional

from ..core.errors import DuplicateKeyError, SlugGenerationError
from ..core.logging import get_logger
from ..repositories.base import QUIZZES, EntityStore

logger = get_logger(__name__)

_NON_WORD = re.compile(r"[^\w ]+", re.ASCII)
_SPACES = re.compile(r" +")


def normalize(title: str) -> str:
    """
    Base slug for a title: lowercase, drop anything that is not a word
    character or a space, turn each run of spaces into one hyphen.
    May be empty.
    """
    return _SPACES.sub("-", _NON_WORD.sub("", title.lower()))


class SlugGenerator:
    """Produces unique ``{base}-{n}`` slugs for quizzes."""

    def __init__(
        self,
        store: EntityStore,
        suffix_range: int = 10000,
        max_attempts: int = 1000,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.store = store
        self.suffix_range = suffix_range
        self.max_attempts = max_attempts
        self.rng = rng or random.Random()

    def candidate(self, base: str) -> str:
        return f"{base}-{self.rng.randrange(self.suffix_range)}"

    async def generate(self, title: str) -> str:
        """
        Return a slug no quiz uses right now. Another writer may still take
        it before our insert; use ``insert_with_unique_slug`` to persist.
        """
        base = normalize(title)
        for _ in range(self.max_attempts):
            slug = self.candidate(base)
            if await self.store.find_one(QUIZZES, {"slug": slug}) is None:
                return slug
        raise SlugGenerationError(
            f"No free slug for {base!r} after {self.max_attempts} attempts"
        )

    async def insert_with_unique_slug(self, entity: Mapping[str, Any], title: str) -> dict:
        """
        Insert a quiz under a fresh slug, regenerating whenever the store's
        unique key on ``slug`` rejects the write.
        """
        for attempt in range(1, self.max_attempts + 1):
            slug = await self.generate(title)
            try:
                return await self.store.insert(QUIZZES, {**entity, "slug": slug})
            except DuplicateKeyError as e:
                if e.field != "slug":
                    raise
                logger.info("Slug taken by concurrent writer, retrying", slug=slug, attempt=attempt)
        raise SlugGenerationError(
            f"Could not persist a unique slug for {title!r} after {self.max_attempts} attempts"
        )
