"""Surya OCR wire schemas."""

from pydantic import BaseModel, ConfigDict, Field


class SuryaImagePayload(BaseModel):
    mime_type: str
    data: str


class SuryaRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    image: SuryaImagePayload = Field(alias="json")


class SuryaLine(BaseModel):
    text: str
    box: tuple[float, float, float, float]


class SuryaResponse(BaseModel):
    text: str
    lines: list[SuryaLine] | None = None
