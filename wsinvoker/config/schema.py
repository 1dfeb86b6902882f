"""Configuration schema using Pydantic.

Options persist to ~/.wsinvoker/config.json and can be overridden with
WSINVOKER_* environment variables.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class InvokerOptions(BaseSettings):
    """Runtime options for an Invoker."""
    log_level: str = "DEBUG"  # Level used by the default loguru event sink
    log_raw_frames: bool = False  # Include raw frame text in log details
    strict_method_names: bool = True  # Reject method names containing the separator
    not_implemented_message: str = Field(default="Method not implemented", min_length=1)

    model_config = SettingsConfigDict(
        env_prefix="WSINVOKER_",
        extra="ignore",
    )
