"""Pydantic configuration models with type safety and validation."""

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

DEFAULT_LOG_FILE = "helper_log.txt"

# Flat keys accepted from older config.json files
_LEGACY_TELEGRAM_KEYS = {
    "telegramBotToken": "bot_token",
    "telegram_bot_token": "bot_token",
    "telegramChatId": "chat_id",
    "telegram_chat_id": "chat_id",
}


class _CamelModel(BaseModel):
    """Accepts both snake_case and camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ScreenshotRegion(_CamelModel):
    """Capture rectangle relative to the platform window's top-left corner.

    A zero width or height means "capture the whole window".
    """

    x: int = Field(default=0, ge=0, description="Left offset inside the window")
    y: int = Field(default=0, ge=0, description="Top offset inside the window")
    width: int = Field(default=0, ge=0, description="Region width (0 = whole window)")
    height: int = Field(default=0, ge=0, description="Region height (0 = whole window)")

    @property
    def is_whole_window(self) -> bool:
        return self.width <= 0 or self.height <= 0


class TelegramConfig(_CamelModel):
    """Telegram bot settings. Empty credentials disable notifications."""

    bot_token: str = Field(default="", description="Bot API token")
    chat_id: str = Field(default="", description="Destination chat id")
    timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        description="HTTP timeout for each Bot API request",
    )
    max_retries: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Attempts per request on rate limiting or timeouts",
    )

    @field_validator("chat_id", mode="before")
    @classmethod
    def _chat_id_as_str(cls, value: Any) -> Any:
        # numeric chat ids are common in hand-written JSON
        if isinstance(value, int):
            return str(value)
        return value

    @property
    def has_credentials(self) -> bool:
        return bool(self.bot_token.strip()) and bool(self.chat_id.strip())


class BridgeConfig(_CamelModel):
    """Top-level bridge configuration."""

    mt5_window_title: str = Field(
        default="MetaTrader 5",
        min_length=1,
        validation_alias=AliasChoices("mt5_window_title", "mt5WindowTitle"),
        description="Title of the platform window to capture",
    )
    signals_folder: str = Field(
        min_length=1,
        description="Folder where the expert advisor writes latest_signal.txt",
    )
    signal_file_name: str = Field(
        default="latest_signal.txt",
        min_length=1,
        description="Name of the signal file inside signals_folder",
    )
    journal_folder: str = Field(
        min_length=1,
        description="Root folder for day-partitioned journals and screenshots",
    )
    poll_interval_seconds: int = Field(
        default=3,
        ge=1,
        description="Seconds between signal file checks",
    )
    duplicate_minutes: float = Field(
        default=5.0,
        ge=0.0,
        description="Cooldown between accepted signals with the same symbol and strategy",
    )
    screenshot_delay_seconds: float = Field(
        default=2.0,
        ge=0.0,
        description="Settle delay before capturing the chart",
    )
    screenshot_region: ScreenshotRegion = Field(default_factory=ScreenshotRegion)
    telegram: TelegramConfig = Field(default_factory=TelegramConfig)
    log_file: str = Field(default=DEFAULT_LOG_FILE, description="Persistent log file")
    log_level: str = Field(default="INFO", description="Root log level")

    @model_validator(mode="before")
    @classmethod
    def _fold_legacy_telegram_keys(cls, data: Any) -> Any:
        """Move flat telegramBotToken/telegramChatId keys into the telegram section."""
        if not isinstance(data, dict):
            return data
        legacy = {k: v for k, v in data.items() if k in _LEGACY_TELEGRAM_KEYS}
        if not legacy:
            return data
        data = {k: v for k, v in data.items() if k not in _LEGACY_TELEGRAM_KEYS}
        section = dict(data.get("telegram") or {})
        for key, value in legacy.items():
            section.setdefault(_LEGACY_TELEGRAM_KEYS[key], value)
        data["telegram"] = section
        return data

    @field_validator("signals_folder", "journal_folder")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("folder must not be blank")
        return value.strip()

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {value}")
        return level
