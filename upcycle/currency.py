"""Currency conversion through a pluggable rate provider.

Two providers ship with the package:

  - ``StaticRateProvider``: a fixed in-memory table, for offline use and tests
  - ``HttpRateProvider``:   live rates from a Frankfurter-compatible API

``convert`` never invents a rate: if the provider cannot answer, the
``RateUnavailableError`` reaches the caller.
"""

import logging
import math
from typing import Optional, Protocol

import httpx

from upcycle.errors import RateUnavailableError
from upcycle.models import Currency

logger = logging.getLogger(__name__)

# Approximate real-world rates, 1 USD → X units
_PER_USD: dict[Currency, float] = {
    Currency.USD: 1.0,
    Currency.AUD: 1.53,
    Currency.GBP: 0.79,
    Currency.CAD: 1.37,
    Currency.EUR: 0.92,
}

# 1 unit of FROM → X units of TO
DEFAULT_RATES: dict[tuple[Currency, Currency], float] = {
    (src, dst): _PER_USD[dst] / _PER_USD[src]
    for src in Currency
    for dst in Currency
}


class RateProvider(Protocol):
    def rate(self, from_currency: Currency, to_currency: Currency) -> float: ...


class StaticRateProvider:
    def __init__(self, rates: Optional[dict[tuple[Currency, Currency], float]] = None) -> None:
        self.rates = dict(DEFAULT_RATES if rates is None else rates)

    def rate(self, from_currency: Currency, to_currency: Currency) -> float:
        rate = self.rates.get((from_currency, to_currency))
        if rate is None:
            raise RateUnavailableError(
                f"No exchange rate for {from_currency.value} → {to_currency.value}"
            )
        return rate


class HttpRateProvider:
    """Fetches the latest rate for a currency pair over HTTP.

    Expects ``GET {base_url}/latest?from=USD&to=EUR`` to answer with a body
    like ``{"base": "USD", "rates": {"EUR": 0.92}}``.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client if client is not None else httpx.Client(timeout=timeout)

    def rate(self, from_currency: Currency, to_currency: Currency) -> float:
        src = from_currency.value.upper()
        dst = to_currency.value.upper()
        try:
            response = self._client.get(
                f"{self.base_url}/latest",
                params={"from": src, "to": dst},
            )
            response.raise_for_status()
            rate = float(response.json()["rates"][dst])
        except httpx.HTTPError as exc:
            logger.warning("Rate lookup %s → %s failed: %s", src, dst, exc)
            raise RateUnavailableError(f"Rate service error for {src} → {dst}: {exc}") from exc
        except (ValueError, KeyError, TypeError) as exc:
            logger.warning("Rate lookup %s → %s returned a malformed body", src, dst)
            raise RateUnavailableError(f"Malformed rate response for {src} → {dst}") from exc

        if not math.isfinite(rate) or rate <= 0:
            raise RateUnavailableError(f"Unusable rate {rate} for {src} → {dst}")
        logger.debug("Rate %s → %s = %s", src, dst, rate)
        return rate

    def close(self) -> None:
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "HttpRateProvider":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def convert(
    amount: float,
    from_currency: Currency,
    to_currency: Currency,
    provider: RateProvider,
) -> float:
    """Return ``amount`` expressed in ``to_currency``. No rounding is applied."""
    if from_currency == to_currency:
        return amount
    return amount * provider.rate(from_currency, to_currency)
