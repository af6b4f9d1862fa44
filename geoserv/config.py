"""
Centralized configuration with environment variable overrides.

The slot catalog and lookahead windows live here so no call site
re-declares them.
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from geoserv.logging_context import build_handler

load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_SLOT_LABELS = "7–9,9–11,11–1,1–3,3–5"


def _safe_int(env_var: str, default: str) -> int:
    """Parse an integer from an env var with a clear error on bad values."""
    raw = os.getenv(env_var, default)
    try:
        return int(raw)
    except (ValueError, TypeError):
        raise ValueError(
            f"Invalid integer for {env_var}: {raw!r}"
        ) from None


def _safe_list(env_var: str, default: str) -> tuple[str, ...]:
    """Parse a comma-separated env var into a tuple of stripped, non-empty items."""
    raw = os.getenv(env_var, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class SlotConfig:
    """Fixed daily time slots, in display order."""

    labels: tuple[str, ...] = _safe_list("SLOT_LABELS", DEFAULT_SLOT_LABELS)


@dataclass(frozen=True)
class AvailabilityConfig:
    """Lookahead windows for day listings."""

    lookahead_days: int = _safe_int("LOOKAHEAD_DAYS", "90")
    address_lookahead_days: int = _safe_int("ADDRESS_LOOKAHEAD_DAYS", "60")
    listing_days: int = _safe_int("LISTING_DAYS", "14")


@dataclass(frozen=True)
class AppConfig:
    """Root configuration aggregating all sub-configs."""

    slots: SlotConfig = field(default_factory=SlotConfig)
    availability: AvailabilityConfig = field(default_factory=AvailabilityConfig)
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    service_name: str = os.getenv("SERVICE_NAME", "geoserv")


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values are within acceptable ranges."""
    labels = config.slots.labels
    if not labels:
        raise ValueError("SLOT_LABELS must define at least one slot")
    if len(set(labels)) != len(labels):
        raise ValueError(f"SLOT_LABELS must not contain duplicates, got {list(labels)}")

    for name, value in [
        ("LOOKAHEAD_DAYS", config.availability.lookahead_days),
        ("ADDRESS_LOOKAHEAD_DAYS", config.availability.address_lookahead_days),
        ("LISTING_DAYS", config.availability.listing_days),
    ]:
        if value < 1:
            raise ValueError(f"{name} must be >= 1, got {value}")


def load_config() -> AppConfig:
    """Load and validate application configuration."""
    config = AppConfig()
    _validate_config(config)
    # No-op when the root logger already has handlers (e.g. under pytest).
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        handlers=[build_handler()],
    )
    logger.info(
        "Configuration loaded for '%s' (%d slots per day)",
        config.service_name,
        len(config.slots.labels),
    )
    return config


# Singleton instance
settings = load_config()
