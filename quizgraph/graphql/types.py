# quizgraph/graphql/types.py
import strawberry
from typing import List, Optional


@strawberry.type(name="User", description="User Type")
class UserType:
    id: strawberry.ID
    username: Optional[str]
    email: Optional[str]

    @strawberry.field
    async def quizzes(self, info: strawberry.Info) -> Optional[List[Optional["QuizType"]]]:
        from .resolvers import resolve_user_quizzes
        return await resolve_user_quizzes(self, info)

    @classmethod
    def from_row(cls, row: dict) -> "UserType":
        # password hash stays server-side
        return cls(
            id=strawberry.ID(str(row["id"])),
            username=row.get("username"),
            email=row.get("email"),
        )


@strawberry.type(name="Quiz", description="Quiz Type")
class QuizType:
    id: strawberry.ID
    slug: Optional[str]
    title: Optional[str]
    description: Optional[str]
    userId: Optional[strawberry.ID]

    @strawberry.field
    async def user(self, info: strawberry.Info) -> Optional[UserType]:
        from .resolvers import resolve_quiz_user
        return await resolve_quiz_user(self, info)

    @strawberry.field
    async def questions(self, info: strawberry.Info) -> Optional[List[Optional["QuestionType"]]]:
        from .resolvers import resolve_quiz_questions
        return await resolve_quiz_questions(self, info)

    @classmethod
    def from_row(cls, row: dict) -> "QuizType":
        user_id = row.get("user_id")
        return cls(
            id=strawberry.ID(str(row["id"])),
            slug=row.get("slug"),
            title=row.get("title"),
            description=row.get("description"),
            userId=strawberry.ID(str(user_id)) if user_id is not None else None,
        )


@strawberry.type(name="Question", description="Question Type")
class QuestionType:
    id: strawberry.ID
    title: Optional[str]
    correctAnswer: Optional[str]
    order: Optional[int]
    quizId: Optional[strawberry.ID]

    @strawberry.field
    async def quiz(self, info: strawberry.Info) -> Optional[QuizType]:
        from .resolvers import resolve_question_quiz
        return await resolve_question_quiz(self, info)

    @classmethod
    def from_row(cls, row: dict) -> "QuestionType":
        quiz_id = row.get("quiz_id")
        return cls(
            id=strawberry.ID(str(row["id"])),
            title=row.get("title"),
            correctAnswer=row.get("correct_answer"),
            order=row.get("order"),
            quizId=strawberry.ID(str(quiz_id)) if quiz_id is not None else None,
        )


@strawberry.input(name="QuestionInput", description="Question Input Type")
class QuestionInput:
    title: Optional[str] = None
    order: Optional[int] = None
    correctAnswer: Optional[str] = None
