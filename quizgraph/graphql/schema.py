# quizgraph/graphql/schema.py
import strawberry
from typing import Optional, List

from .types import QuestionType, QuizType, UserType
from .resolvers import (
    resolve_create_quiz,
    resolve_login,
    resolve_me,
    resolve_question,
    resolve_quiz,
    resolve_quizzes,
    resolve_register,
    resolve_user,
    resolve_users,
)


@strawberry.type
class Query:
    users: Optional[List[Optional[UserType]]] = strawberry.field(resolver=resolve_users)

    user: Optional[UserType] = strawberry.field(
        resolver=resolve_user,
        description="Get a user by id",
    )

    me: Optional[UserType] = strawberry.field(
        resolver=resolve_me,
        description="User owning the bearer token, if any",
    )

    quizzes: Optional[List[Optional[QuizType]]] = strawberry.field(resolver=resolve_quizzes)

    quiz: Optional[QuizType] = strawberry.field(
        resolver=resolve_quiz,
        description="Get a quiz by slug",
    )

    question: Optional[QuestionType] = strawberry.field(
        resolver=resolve_question,
        description="Get a question by id",
    )


@strawberry.type
class Mutation:
    register: Optional[str] = strawberry.field(
        resolver=resolve_register,
        description="Register a new user",
    )
    login: Optional[str] = strawberry.field(
        resolver=resolve_login,
        description="Log a user in with email and password",
    )
    createQuiz: Optional[str] = strawberry.field(
        resolver=resolve_create_quiz,
        description="Creates a new quiz with questions",
    )


# Built once at import; shared read-only by every request.
schema = strawberry.Schema(query=Query, mutation=Mutation)
