# quizgraph/graphql/resolvers.py
from typing import Optional, List

import strawberry

from ..core.errors import InvalidTokenError
from .context import get_bearer_token, get_services
from .types import QuestionInput, QuestionType, QuizType, UserType


# -------------------------------
# Field Resolvers
# -------------------------------

async def resolve_user_quizzes(user: UserType, info: strawberry.Info) -> List[QuizType]:
    rows = await get_services(info).quizzes.quizzes_for_user(user.id)
    return [QuizType.from_row(r) for r in rows]


async def resolve_quiz_user(quiz: QuizType, info: strawberry.Info) -> Optional[UserType]:
    row = await get_services(info).users.get_user(quiz.userId)
    return UserType.from_row(row) if row else None


async def resolve_quiz_questions(quiz: QuizType, info: strawberry.Info) -> List[QuestionType]:
    rows = await get_services(info).quizzes.questions_for_quiz(quiz.id)
    return [QuestionType.from_row(r) for r in rows]


async def resolve_question_quiz(question: QuestionType, info: strawberry.Info) -> Optional[QuizType]:
    row = await get_services(info).quizzes.get_quiz(question.quizId)
    return QuizType.from_row(row) if row else None


# -------------------------------
# Query Resolvers
# -------------------------------

async def resolve_users(info: strawberry.Info) -> List[UserType]:
    rows = await get_services(info).users.list_users()
    return [UserType.from_row(r) for r in rows]


async def resolve_user(info: strawberry.Info, id: strawberry.ID) -> Optional[UserType]:
    row = await get_services(info).users.get_user(id)
    return UserType.from_row(row) if row else None


async def resolve_me(info: strawberry.Info) -> Optional[UserType]:
    token = get_bearer_token(info)
    if not token:
        return None
    try:
        row = await get_services(info).users.user_from_token(token)
    except InvalidTokenError:
        return None
    return UserType.from_row(row) if row else None


async def resolve_quizzes(info: strawberry.Info) -> List[QuizType]:
    rows = await get_services(info).quizzes.list_quizzes()
    return [QuizType.from_row(r) for r in rows]


async def resolve_quiz(info: strawberry.Info, slug: str) -> Optional[QuizType]:
    row = await get_services(info).quizzes.get_quiz_by_slug(slug)
    return QuizType.from_row(row) if row else None


async def resolve_question(info: strawberry.Info, id: strawberry.ID) -> Optional[QuestionType]:
    row = await get_services(info).quizzes.get_question(id)
    return QuestionType.from_row(row) if row else None


# -------------------------------
# Mutations
# -------------------------------

async def resolve_register(
    info: strawberry.Info,
    username: Optional[str] = None,
    email: Optional[str] = None,
    password: Optional[str] = None,
) -> Optional[str]:
    return await get_services(info).users.register(username, email, password)


async def resolve_login(
    info: strawberry.Info,
    email: Optional[str] = None,
    password: Optional[str] = None,
) -> Optional[str]:
    return await get_services(info).users.login(email, password)


async def resolve_create_quiz(
    info: strawberry.Info,
    questions: List[QuestionInput],
    title: Optional[str] = None,
    description: Optional[str] = None,
    userId: Optional[strawberry.ID] = None,
) -> Optional[str]:
    items = [
        {
            "title": q.title,
            "order": q.order,
            "correctAnswer": q.correctAnswer,
        }
        for q in questions
    ]

    return await get_services(info).quizzes.create_quiz(
        title=title,
        description=description,
        user_id=userId,
        questions=items,
    )
