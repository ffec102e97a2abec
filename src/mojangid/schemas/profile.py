from typing import Any

from pydantic import BaseModel, Field, field_validator


class Profile(BaseModel):
    id: str
    name: str | None = None


class NameChange(BaseModel):
    name: str
    changed_to_at: int = Field(default=0, alias="changedToAt", strict=True)

    @field_validator("changed_to_at", mode="before")
    @classmethod
    def _missing_timestamp_is_earliest(cls, value: Any) -> Any:
        # The original name of an account carries no timestamp
        return 0 if value is None else value

    model_config = {"populate_by_name": True}
