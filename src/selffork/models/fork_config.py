"""Configuration model for selffork."""

import pickle

from pydantic import BaseModel, Field

from selffork.constants import DEFAULT_TEMP_PREFIX


class ForkConfig(BaseModel):
    """Runtime configuration shared by launcher and child."""

    temp_dir: str | None = None
    temp_prefix: str = DEFAULT_TEMP_PREFIX
    pickle_protocol: int = Field(default=pickle.HIGHEST_PROTOCOL, ge=0, le=pickle.HIGHEST_PROTOCOL)
    strict: bool = False
