"""Runtime configuration for the console terminal."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="CONSOLE_TERMINAL_", env_file=".env", extra="ignore")

    app_name: str = "console-terminal"
    log_level: str = "WARNING"
    host_name: str = "terminal"
    animate: bool = True
    char_delay_seconds: float = Field(default=0.01, ge=0.0, description="Delay between revealed characters.")
    token_delay_seconds: float = Field(default=0.0, ge=0.0, description="Pause between markup tokens.")
    scroll_interval_seconds: float = Field(
        default=0.05,
        ge=0.0,
        description="Minimum spacing between scroll-to-end requests while a token is revealed.",
    )
    settle_delay_seconds: float = Field(default=0.05, ge=0.0, description="Pause after each rendered message.")
    start_location: str = "beginning"
    entry_room: str = "dark room"
    world_file: str | None = Field(
        default=None,
        description="Optional JSON file with the location graph; the built-in map is used when unset.",
    )


settings = Settings()
