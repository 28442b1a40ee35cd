"""
Deterministic demo-data generator.

Produces:
  - 3 sellers and 5 buyers
  - 60 listings spread over every size / colour / condition
  - 25 sales between registered buyers and sellers over Jan 2026
  - Currencies: USD, AUD, GBP, CAD, EUR

Run ``python -m scripts.seed_data`` for a summary of the seeded registry.
"""

import logging
import random
from datetime import datetime, timedelta

from upcycle.config import Settings, setup_logging
from upcycle.currency import StaticRateProvider
from upcycle.models import Colour, Currency, Item, ItemCondition, Size
from upcycle.registry import MarketplaceRegistry, create_registry

logger = logging.getLogger(__name__)

SEED = 42
START = datetime(2026, 1, 1)
END   = datetime(2026, 1, 31, 23, 59, 59)

SELLERS = [
    ("thriftqueen", "queen@thrift.example", "Maya", "Okafor", "Melbourne"),
    ("denimdoctor", "doc@denim.example", "Sam", "Ruiz", "Toronto"),
    ("retroroom", "hello@retroroom.example", "Ilse", "Berg", "Berlin"),
]

BUYERS = [
    ("alice", "alice@example.com", "Alice", "Nguyen"),
    ("bram", "bram@example.com", "Bram", "de Vries"),
    ("chloe", "chloe@example.com", "Chloe", "Martin"),
    ("dev", "dev@example.com", "Dev", "Patel"),
    ("emeka", "emeka@example.com", "Emeka", "Obi"),
]

TITLES = ["Denim jacket", "Wool jumper", "Silk scarf", "Leather boots", "Linen shirt", "Corduroy skirt"]

# realistic ticket sizes per currency
PRICE_RANGES = {
    Currency.USD: (5, 250),
    Currency.AUD: (8, 380),
    Currency.GBP: (4, 200),
    Currency.CAD: (7, 340),
    Currency.EUR: (5, 230),
}


def _rand_dt(rng: random.Random, lo: datetime = START, hi: datetime = END) -> datetime:
    delta = hi - lo
    secs = rng.randint(0, int(delta.total_seconds()))
    return lo + timedelta(seconds=secs)


def _rand_item(rng: random.Random) -> Item:
    currency = rng.choice(list(Currency))
    lo, hi = PRICE_RANGES[currency]
    title = rng.choice(TITLES)
    return Item(
        title=title,
        description=f"Pre-loved {title.lower()}",
        size=rng.choice([*Size, None]),
        colour=rng.choice([*Colour, None]),
        condition=rng.choice(list(ItemCondition)),
        price=round(rng.uniform(lo, hi), 2),
        currency=currency,
    )


def seed(registry: MarketplaceRegistry) -> None:
    rng = random.Random(SEED)

    # ── users ────────────────────────────────────────────────────────────────
    for username, email, first, last, _ in SELLERS:
        registry.register_user(username, email, first, last)
    for username, email, first, last in BUYERS:
        registry.register_user(username, email, first, last)

    # ── listings ─────────────────────────────────────────────────────────────
    for n in range(60):
        username, *_, location = rng.choice(SELLERS)
        registry.create_listing(
            _rand_item(rng),
            username,
            image_url=f"https://img.upcyclenation.com/{n:04d}.jpg" if rng.random() < 0.8 else None,
            seller_location=location,
            seller_rating=round(rng.uniform(3.0, 5.0), 1),
        )

    # ── sales ────────────────────────────────────────────────────────────────
    listings = registry.get_store_listings()
    for listing in rng.sample(listings, 25):
        buyer = rng.choice(BUYERS)[0]
        # most items go for slightly under the asking price
        price = round(listing.item.price * rng.uniform(0.8, 1.0), 2)
        registry.record_sale(listing.item, buyer, listing.seller_username, price, _rand_dt(rng))


if __name__ == "__main__":
    settings = Settings()
    setup_logging(settings.log_level)
    with create_registry(settings, rate_provider=StaticRateProvider()) as registry:
        seed(registry)
        logger.info(
            "Seeded %d users, %d listings (book value %.2f)",
            len(registry.list_users()),
            len(registry.store.listings),
            registry.get_store_revenue(),
        )
