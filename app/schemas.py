"""Pydantic schemas shared across the API."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Dict, Optional
from datetime import datetime


class ErrorResponse(BaseModel):
    """Schema for every error body returned by the API."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    timestamp: datetime
    status: int
    error: str
    message: str
    path: str
    field_errors: Optional[Dict[str, str]] = None


class RootResponse(BaseModel):
    """Schema for the API root."""
    message: str
    version: str
