from __future__ import annotations

from pydantic import BaseModel


class UserRefResponse(BaseModel):
    id: int
    display_name: str

    model_config = {"from_attributes": True}
