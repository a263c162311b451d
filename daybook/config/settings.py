"""
Configuration Management for Daybook

Every knob is an environment variable (or a `.env` entry) read through
pydantic-settings.

DESIGN DECISION: Configuration lives in this one module.
Which storage backend is used, how big an admin page is and how many
entries the "top" lists show are all decided in one place.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


STORAGE_BACKENDS = ("memory", "local", "google_sheets")


class LocalStorageSettings(BaseSettings):
    """Local JSON file storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LOCAL_STORAGE_",
        env_file=".env",
        extra="ignore"
    )

    path: str = Field(
        default="data/transactions.json",
        description="Path to the JSON file holding transactions"
    )


class GoogleSheetsSettings(BaseSettings):
    """Settings for the shared Google Sheets backend. All required when it is used."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_SHEETS_",
        env_file=".env",
        extra="ignore"
    )

    credentials_path: str = Field(
        ...,
        description="Path to Google service account credentials JSON"
    )
    spreadsheet_id: str = Field(
        ...,
        description="ID of the Google Sheets spreadsheet to use"
    )
    transactions_sheet_name: str = Field(
        default="Transactions",
        description="Name of the sheet for transactions"
    )

    @field_validator('credentials_path')
    @classmethod
    def validate_credentials_path(cls, v: str) -> str:
        """A missing file only warns; it may be mounted after startup."""
        if not Path(v).exists():
            import warnings
            warnings.warn(
                f"Google credentials file not found at {v}. "
                "Until it does, the google_sheets backend falls back to the local file."
            )
        return v


class AppSettings(BaseSettings):
    """
    Day book behaviour: storage choice, table and report sizes, display.

    Read from the environment, then from `.env`.
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
    log_level: str = Field(
        default="INFO",
        description="Minimum level for structured logs"
    )

    # Storage
    storage_backend: str = Field(
        default="local",
        description="Which storage backend to use: memory, local or google_sheets"
    )

    # Presentation
    page_size: int = Field(
        default=10,
        ge=1,
        le=500,
        description="Rows per page in the admin table"
    )
    top_income_count: int = Field(
        default=3,
        ge=1,
        description="How many income sources the monthly report ranks"
    )
    top_expense_count: int = Field(
        default=4,
        ge=1,
        description="How many expense categories the monthly report ranks"
    )
    currency_symbol: str = Field(
        default="৳",
        description="Currency symbol shown next to amounts"
    )

    # Validation thresholds
    max_amount_warning: float = Field(
        default=1000000.0,
        description="Amounts above this get a 'please double check' warning"
    )

    @field_validator('storage_backend')
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        """Only known backends are accepted."""
        backend = v.strip().lower()
        if backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"Unknown storage backend: {v}. Allowed: {', '.join(STORAGE_BACKENDS)}"
            )
        return backend

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.strip().upper()


class Settings(BaseSettings):
    """
    Root settings container.

    One property per section; each section reads the environment on access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Sub-settings are built on access. A missing Google Sheets
    # configuration only fails the `google_sheets` property.

    @property
    def local_storage(self) -> LocalStorageSettings:
        return LocalStorageSettings()

    @property
    def google_sheets(self) -> GoogleSheetsSettings:
        return GoogleSheetsSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """Settings container, built once per process (see `cache_clear`)."""
    return Settings()


SETTINGS_SECTIONS = ("app", "local_storage", "google_sheets")


def validate_all_settings() -> dict[str, bool]:
    """
    Try to load every settings section.

    Returns {section: loaded_ok}, plus {section}_error with the message
    for each section that failed. Shown on the Settings page.
    """
    settings = get_settings()
    results = {}
    for section in SETTINGS_SECTIONS:
        try:
            getattr(settings, section)
        except Exception as e:
            results[section] = False
            results[f"{section}_error"] = str(e)
        else:
            results[section] = True
    return results
