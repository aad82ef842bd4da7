from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr


class QuestionIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: StrictStr
    order: StrictInt
    correct_answer: StrictStr = Field(alias="correctAnswer")


class QuizCreateIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    title: StrictStr
    description: Optional[StrictStr] = None
    user_id: StrictStr = Field(alias="userId")
    questions: List[QuestionIn]
