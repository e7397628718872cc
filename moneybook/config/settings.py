"""
Configuration Management for MoneyBook

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The storage location can be overridden at runtime (see
JsonFileStorage.set_base_path), but its default comes from these settings.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """JSON file storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="MONEYBOOK_STORAGE_",
        extra="ignore"
    )

    data_dir: Path = Field(
        default=Path("data"),
        description="Directory holding the categories and expenses files"
    )
    categories_file: str = Field(
        default="categories.json",
        description="File name of the categories store"
    )
    expenses_file: str = Field(
        default="expenses.json",
        description="File name of the expenses store"
    )
    image_dir_name: str = Field(
        default="images",
        description="Subdirectory the front end copies expense images into"
    )
    indent: int = Field(
        default=2,
        ge=0,
        le=8,
        description="Indentation of the pretty-printed JSON files"
    )

    @field_validator('categories_file', 'expenses_file')
    @classmethod
    def validate_file_name(cls, v: str) -> str:
        """File names must not point outside the data directory."""
        if not v or Path(v).name != v:
            raise ValueError(f"Store file name must be a plain file name, got: {v!r}")
        return v

    @property
    def image_dir(self) -> Path:
        return self.data_dir / self.image_dir_name


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Presentation
    page_size: int = Field(
        default=10,
        ge=1,
        le=500,
        description="Expenses shown per page in list views"
    )
    date_pattern: str = Field(
        default="%d.%m.%Y",
        description="strftime pattern for displayed dates"
    )
    time_pattern: str = Field(
        default="%H:%M",
        description="strftime pattern for displayed and entered times"
    )
    amount_pattern: str = Field(
        default="%.2f",
        description="printf-style pattern for displayed amounts"
    )

    # Validation thresholds
    max_expense_amount: float = Field(
        default=1000000.0,
        gt=0,
        description="Amounts above this are flagged (warning only)"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with an "<name>_error"
    entry for each failing group. Useful for startup checks.
    """
    results = {}
    settings = get_settings()

    for name in ("storage", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
