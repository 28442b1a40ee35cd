"""Runtime settings, read from ``UPCYCLE_*`` environment variables."""

import logging
import sys

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    store_name: str = "Upcycle Nation"
    store_description: str = "Reduce, Reuse, Recycle with Upcycle Nation!"
    store_website_url: str = "upcyclenation.com"

    rate_api_url: str = "https://api.frankfurter.app"
    rate_timeout_seconds: float = 10.0

    # Reject sales whose buyer is not registered instead of orphaning them
    strict_sales: bool = False

    log_level: str = "INFO"

    model_config = {"env_prefix": "UPCYCLE_"}


def setup_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        level=getattr(logging, level.upper(), logging.INFO),
    )
