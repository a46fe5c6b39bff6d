"""
Shared schema pieces: localized text and simple message responses.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import HTTPException, status
from pydantic import BaseModel, Field, ValidationError

LANGUAGES: tuple[str, ...] = ("en", "fr", "ar")


def normalize_localized(value: Any) -> dict[str, str]:
    """
    Coerce a localized value to a language → text mapping.

    A bare string is taken as the English text.
    """
    if value is None:
        return {}
    if isinstance(value, str):
        return {"en": value}
    if isinstance(value, dict):
        return {str(k): str(v) for k, v in value.items() if v is not None}
    raise ValueError("Localized text must be a string or an object of language → text")


class LocalizedText(BaseModel):
    """Marketing copy; every supported language is mandatory."""

    en: str = Field(min_length=1)
    fr: str = Field(min_length=1)
    ar: str = Field(min_length=1)


def parse_localized_form(raw: str | None, field: str, required: bool = True) -> dict[str, str] | None:
    """
    Parse a localized JSON blob sent as a multipart form field.

    Returns None when the field was not sent and ``required`` is False.
    Raises 400 for unparseable JSON or a missing language.
    """
    if raw is None or raw == "":
        if required:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail={"code": "VALIDATION_ERROR", "message": f"{field} is required"},
            )
        return None

    try:
        decoded = json.loads(raw)
    except json.JSONDecodeError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"code": "VALIDATION_ERROR", "message": f"{field} must be valid JSON"},
        )

    try:
        return LocalizedText.model_validate(decoded).model_dump()
    except ValidationError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "code": "VALIDATION_ERROR",
                "message": f"{field} needs non-empty {', '.join(LANGUAGES)} entries",
            },
        )


class MessageResponse(BaseModel):
    message: str
