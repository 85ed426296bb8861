"""Canonical player record exchanged by every layer."""

from __future__ import annotations

from datetime import date
from typing import Any, Dict

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict


class Player(BaseModel):
    """One footballer. Replaced wholesale on update, never patched."""

    id: str = Field(..., min_length=1)
    number: int
    name: str
    position: str
    birth_date: date = Field(..., alias="birthDate")

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
