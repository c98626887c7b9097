from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class TodoBase(BaseModel):
    task: str


class TodoCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    task: Optional[str] = None
    user_id: Optional[str] = Field(default=None, alias="userId")
    done: Optional[bool] = None


class TodoOut(TodoBase):
    model_config = ConfigDict(from_attributes=True)

    id: str
    done: bool
    user_id: str = Field(
        validation_alias=AliasChoices("user_id", "userId"),
        serialization_alias="userId",
    )
