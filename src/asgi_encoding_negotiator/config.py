import enum
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from asgi_encoding_negotiator.negotiation import Coding


class ConfigError(ValueError):
    """Raised for settings that cannot be turned into a NegotiationConfig."""


class CompressionLevel(enum.IntEnum):
    NONE = 0
    LOW = 1
    NORMAL = 6
    HIGH = 9


class NegotiationConfig(BaseModel):
    """
    Server-side negotiation settings.

    Built once at startup and shared read-only by every request. Accepts the
    field names or their camelCase aliases.
    """
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    preferred_algorithm: Literal[Coding.GZIP, Coding.DEFLATE] = Field(
        default=Coding.GZIP,
        alias="preferredAlgorithm",
        description="Coding chosen when gzip and deflate are equally acceptable",
    )

    compression_level: int = Field(
        default=CompressionLevel.NORMAL.value,
        alias="compressionLevel",
        ge=0,
        le=9,
        description="zlib level handed to the compressor",
    )

    @field_validator("preferred_algorithm", mode="before")
    @classmethod
    def _coerce_algorithm(cls, value: Any) -> Any:
        if isinstance(value, str) and not isinstance(value, Coding):
            return Coding(value.strip().lower())
        return value

    @field_validator("compression_level", mode="before")
    @classmethod
    def _coerce_level(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("compression level must be a number or a level name")
        if isinstance(value, str) and not value.strip().lstrip("-").isdigit():
            try:
                return CompressionLevel[value.strip().upper()].value
            except KeyError:
                raise ValueError(f"unknown compression level name {value!r}") from None
        return value

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> "NegotiationConfig":
        """Builds a config from application settings, raising ConfigError on bad values."""
        try:
            return cls.model_validate(dict(settings))
        except ValidationError as exc:
            raise ConfigError(str(exc)) from exc
