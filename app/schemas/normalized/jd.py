from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class NormalizedJD(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str
    title: str | None = None
    required_terms: tuple[str, ...] = ()
