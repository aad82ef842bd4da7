from pydantic import BaseModel, ConfigDict, StrictStr


class RegisterIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    username: StrictStr
    email: StrictStr
    password: StrictStr


class LoginIn(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: StrictStr
    password: StrictStr
