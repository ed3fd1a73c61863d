"""
Data models for Boomer Bot MCP.

Provides the Pydantic model for video records parsed from the
source document, plus configuration enums and settings.
"""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from models.config import ResponseFormat, ServerSettings, load_settings

__all__ = [
    "VideoRecord",
    "ResponseFormat",
    "ServerSettings",
    "load_settings",
]

# ══════════════════════════════════════════════════════════════════════════════
# Video Record
# ══════════════════════════════════════════════════════════════════════════════


class VideoRecord(BaseModel):
    """One entry of the videos.json document."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        coerce_numbers_to_str=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    title: str = Field(
        default="",
        validation_alias=AliasChoices("OU Sooners videos", "Title", "title"),
    )
    description: str = Field(
        default="",
        validation_alias=AliasChoices("Description", "description"),
    )
    url: str = Field(
        default="",
        validation_alias=AliasChoices("URL", "Url", "url"),
    )
    channel: str = Field(
        default="",
        validation_alias=AliasChoices("Channel", "channel", "channel_name"),
    )
    published: str = Field(
        default="",
        validation_alias=AliasChoices(
            "Published", "published", "published_date", "Date"
        ),
    )

    @field_validator("*", mode="before")
    @classmethod
    def none_as_empty(cls, v: Any) -> Any:
        """Source rows sometimes carry explicit nulls."""
        return "" if v is None else v
