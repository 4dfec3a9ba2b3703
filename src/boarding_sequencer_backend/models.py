from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


class BoardingEntry(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    seq: int = Field(ge=1)
    booking_id: int = Field(alias="bookingId")


class SequenceResponse(BaseModel):
    sequence: List[BoardingEntry]


class ErrorResponse(BaseModel):
    detail: str


class ConfigMetadata(BaseModel):
    priority_tables: Dict[str, Dict[str, int]]
    window_columns: List[str]
    aisle_columns: List[str]
    upload_encoding: str
    notes: Dict[str, str]
