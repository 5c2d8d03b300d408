"""Runtime settings, read from the environment, ``.env`` or ``settings.ini``."""

from decimal import Decimal
from pathlib import Path

from decouple import config

DATA_DIR = config("COMMERCE_DATA_DIR", default="data", cast=Path)

DEFAULT_CURRENCY = config("COMMERCE_DEFAULT_CURRENCY", default="USD").upper()

# Order rules, all in DEFAULT_CURRENCY
MINIMUM_ORDER_AMOUNT = config("COMMERCE_MINIMUM_ORDER_AMOUNT", default="10.00", cast=Decimal)
FREE_SHIPPING_THRESHOLD = config(
    "COMMERCE_FREE_SHIPPING_THRESHOLD", default="100.00", cast=Decimal
)
STANDARD_SHIPPING_COST = config("COMMERCE_STANDARD_SHIPPING_COST", default="9.99", cast=Decimal)

EVENT_WORKERS = config("COMMERCE_EVENT_WORKERS", default=2, cast=int)

LOG_LEVEL = config("COMMERCE_LOG_LEVEL", default="INFO")
LOG_JSON = config("COMMERCE_LOG_JSON", default=False, cast=bool)
