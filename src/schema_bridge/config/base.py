"""Converter settings.

Settings only tune output layout and logging; the conversion semantics
do not depend on them.
"""

from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConverterSettings(BaseModel):
    """Settings for the conversion engine and CLI."""

    include_comments: bool = Field(
        default=True,
        description="Emit description comments in generated documents",
    )
    indent: int = Field(default=2, ge=1, le=8, description="Spaces per nesting level")
    reindent_source: bool = Field(
        default=True,
        description="Lay generated Zod source out over multiple lines",
    )
    log_level: str = Field(default="WARNING", description="Logging level for the CLI")

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level
