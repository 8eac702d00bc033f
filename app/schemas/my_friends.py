from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class FriendProfile(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID
    full_name: str = Field(min_length=1, strict=True)
    phone_number: str = Field(min_length=1, strict=True)
    total_friend_count: int = Field(ge=0, strict=True)
    mutual_friend_count: int = Field(ge=0, strict=True)
