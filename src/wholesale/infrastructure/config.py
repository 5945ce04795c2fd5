"""Runtime configuration, read from the environment (and a ``.env`` file).

Variables:
- ``WHOLESALE_DATABASE_URL``        SQLAlchemy URL (default: SQLite file under ``data/``)
- ``WHOLESALE_TAX_RATE``            decimal fraction, e.g. ``0.06``
- ``WHOLESALE_DEFAULT_SHIPPING_FEE`` amount charged when an order names none
- ``WHOLESALE_LOG_LEVEL``           standard logging level name
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path

from dotenv import load_dotenv

from wholesale.domain.exceptions import ValidationError
from wholesale.domain.model.order import OrderPricing
from wholesale.domain.model.value_objects import Money

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

DEFAULT_DATABASE_URL = f"sqlite:///{_DATA_DIR / 'wholesale.db'}"


@dataclass(frozen=True)
class Settings:
    database_url: str = DEFAULT_DATABASE_URL
    tax_rate: Decimal = Decimal("0.06")
    default_shipping_fee: Decimal = Decimal("0")
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        # Raises ValidationError for an out-of-range rate or negative fee.
        self.pricing

    @property
    def pricing(self) -> OrderPricing:
        return OrderPricing(
            tax_rate=self.tax_rate,
            default_shipping_fee=Money(self.default_shipping_fee),
        )

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        if environ is None:
            load_dotenv()
            environ = dict(os.environ)

        log_level = environ.get("WHOLESALE_LOG_LEVEL", "WARNING").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            raise ValidationError(f"Unknown log level: {log_level!r}")

        return Settings(
            database_url=environ.get("WHOLESALE_DATABASE_URL", DEFAULT_DATABASE_URL),
            tax_rate=_decimal(environ, "WHOLESALE_TAX_RATE", "0.06"),
            default_shipping_fee=_decimal(environ, "WHOLESALE_DEFAULT_SHIPPING_FEE", "0"),
            log_level=log_level,
        )


def _decimal(environ: dict[str, str], key: str, default: str) -> Decimal:
    raw = environ.get(key, default)
    try:
        value = Decimal(raw)
    except InvalidOperation as exc:
        raise ValidationError(f"{key} must be a decimal number, got {raw!r}") from exc
    if not value.is_finite():
        raise ValidationError(f"{key} must be a finite number, got {raw!r}")
    return value
