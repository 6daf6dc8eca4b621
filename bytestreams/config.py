"""Runtime settings — env-driven defaults for stream construction.

Centralized config using pydantic-settings.  Reads from a .env file and
BYTESTREAMS_* environment variables.  Decorators and helpers look up their
defaults here at call time; explicit arguments always win.
"""

from __future__ import annotations

import codecs

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StreamSettings(BaseSettings):
    """Default construction parameters for streams.

    Examples
    --------
    Override via environment::

        export BYTESTREAMS_BUFFER_SIZE=4096
        export BYTESTREAMS_LINE_TERMINATOR=";"
        export BYTESTREAMS_LOG_LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BYTESTREAMS_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Buffer capacity for BufferedSink / BufferedSource
    buffer_size: int = Field(default=1024, gt=0)

    # Line helpers
    line_terminator: str = "\n"

    # Encoding applied to str arguments of the writer helpers
    encoding: str = "utf-8"

    # File-backed sinks: append instead of truncate
    file_append: bool = False

    # Observability
    log_level: str = "INFO"

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"unknown encoding: {value}") from exc
        return value

    @field_validator("line_terminator")
    @classmethod
    def _single_byte_terminator(cls, value: str) -> str:
        if len(value.encode("latin-1")) != 1:
            raise ValueError("line_terminator must be exactly one byte")
        return value

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def terminator_byte(self) -> bytes:
        """The line terminator as a single byte."""
        return self.line_terminator.encode("latin-1")


# Module-level singleton, import as `from bytestreams.config import settings`
settings = StreamSettings()
