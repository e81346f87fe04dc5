from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class KeywordStats(BaseModel):
    model_config = ConfigDict(frozen=True)

    keywords: tuple[str, ...] = ()
    found: tuple[str, ...] = ()
    missing: tuple[str, ...] = ()
    match_ratio: float = Field(default=0.0, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def _validate_partition(self) -> "KeywordStats":
        if len(self.found) > len(self.keywords):
            raise ValueError("found keywords cannot exceed the keyword set")
        return self

    @property
    def has_keywords(self) -> bool:
        return bool(self.keywords)
