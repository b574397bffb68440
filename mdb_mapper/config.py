"""
Configuration management for MDB_MAPPER.

`MapperConfig` reads its defaults from environment variables and can be
passed to `DocumentMapper` and `DocumentRepository`. Both accept direct
parameters as well, so configuration stays optional.
"""

import os

from pydantic import BaseModel, Field

from .constants import DEFAULT_ID_ATTRIBUTE, DEFAULT_SET_OPTIONS
from .exceptions import ConfigurationError

_TRUE_VALUES = ("true", "1", "yes", "on")


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


class MapperConfig:
    """
    Mapping and repository configuration.

    Example:
        # Using environment variables
        config = MapperConfig()
        mapper = DocumentMapper(config=config)

        # Or using direct parameters
        config = MapperConfig(strict_numbers=True)
    """

    def __init__(
        self,
        strict_numbers: bool | None = None,
        merge_on_set: bool | None = None,
        id_attribute: str | None = None,
    ):
        """
        Initialize configuration.

        Args:
            strict_numbers: Raise on unparseable numbers instead of returning NaN
                (defaults to MDB_MAPPER_STRICT_NUMBERS or False)
            merge_on_set: Merge documents into existing ones on upsert
                (defaults to MDB_MAPPER_MERGE_ON_SET or True)
            id_attribute: Entity attribute holding the identifier
                (defaults to MDB_MAPPER_ID_ATTRIBUTE or "_id")
        """
        self.strict_numbers = (
            strict_numbers
            if strict_numbers is not None
            else _env_flag("MDB_MAPPER_STRICT_NUMBERS", False)
        )
        self.merge_on_set = (
            merge_on_set
            if merge_on_set is not None
            else _env_flag("MDB_MAPPER_MERGE_ON_SET", DEFAULT_SET_OPTIONS["merge"])
        )
        self.id_attribute = id_attribute or os.getenv(
            "MDB_MAPPER_ID_ATTRIBUTE", DEFAULT_ID_ATTRIBUTE
        )

    def validate(self) -> None:
        """
        Validate configuration values.

        Raises:
            ConfigurationError: If a value is missing or invalid
        """
        if not self.id_attribute or not self.id_attribute.strip():
            raise ConfigurationError(
                "id_attribute is required (set MDB_MAPPER_ID_ATTRIBUTE or pass directly)",
                config_key="id_attribute",
            )

        if not self.id_attribute.isidentifier():
            raise ConfigurationError(
                f"id_attribute must be a valid attribute name, got {self.id_attribute!r}",
                config_key="id_attribute",
                config_value=self.id_attribute,
            )

    @property
    def set_options(self) -> dict[str, bool]:
        """Write options derived from this configuration."""
        return {"merge": self.merge_on_set}


class MapperSettings(BaseModel):
    """
    Pydantic-based configuration with automatic validation.

    Usage:
        settings = MapperSettings.from_env()
        mapper = DocumentMapper(config=settings.to_config())
    """

    strict_numbers: bool = Field(
        False, description="Raise on unparseable numbers instead of returning NaN"
    )
    merge_on_set: bool = Field(True, description="Merge documents into existing ones on upsert")
    id_attribute: str = Field(
        DEFAULT_ID_ATTRIBUTE,
        min_length=1,
        pattern=r"^[A-Za-z_][A-Za-z0-9_]*$",
        description="Entity attribute holding the identifier",
    )

    @classmethod
    def from_env(cls) -> "MapperSettings":
        """Build settings from MDB_MAPPER_* environment variables."""
        values = {}
        for name in cls.model_fields:
            raw = os.getenv(f"MDB_MAPPER_{name.upper()}")
            if raw is not None:
                values[name] = raw
        return cls(**values)

    def to_config(self) -> MapperConfig:
        """Convert to a plain MapperConfig."""
        return MapperConfig(
            strict_numbers=self.strict_numbers,
            merge_on_set=self.merge_on_set,
            id_attribute=self.id_attribute,
        )
