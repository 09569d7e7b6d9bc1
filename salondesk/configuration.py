"""Mini README: Runtime configuration for SalonDesk.

Structure:
    * SalonDeskSettings - Pydantic settings model read from ``SALONDESK_*``
      environment variables or a ``.env`` file.
    * get_settings - cached accessor shared by the register, web app and CLI.

The cash-related defaults (opening float, card surcharge, currency symbol)
live here so a salon can adjust them without touching the register code.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache
from pathlib import Path

from pydantic import Field, validator
from pydantic_settings import BaseSettings


class SalonDeskSettings(BaseSettings):
    """Runtime configuration for the cash desk."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding the register snapshot and exported reports.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the web service to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Port the web service exposes.",
        ge=1,
        le=65535,
    )
    default_opening_float: Decimal = Field(
        Decimal("4090"),
        description=(
            "Opening float assigned to a day that already has activity when its"
            " summary is first created. Days created empty start at zero."
        ),
    )
    card_surcharge_rate: Decimal = Field(
        Decimal("0.05"),
        description="Surcharge applied once to card payments when they are recorded.",
        ge=0,
        le=1,
    )
    currency_symbol: str = Field(
        "RD$",
        description="Prefix used when rendering amounts in reports.",
    )
    persist_register: bool = Field(
        True,
        description="Write the register to ``register.json`` inside the data directory.",
    )

    class Config:
        env_prefix = "SALONDESK_"
        env_file = ".env"
        case_sensitive = False

    @validator("data_directory", pre=True)
    def _expand_path(cls, value: str | Path) -> Path:
        """Expand user directories and make sure the folder exists."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    @property
    def register_path(self) -> Path:
        """Location of the JSON register snapshot."""

        return self.data_directory / "register.json"


@lru_cache()
def get_settings() -> SalonDeskSettings:
    """Return cached settings so every module sees the same configuration."""

    return SalonDeskSettings()
