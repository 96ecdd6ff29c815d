"""Base model for configuration and result records."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Immutable record; unknown keys in config files are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")
