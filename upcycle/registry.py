import logging
from datetime import datetime
from typing import Optional

from upcycle.config import Settings
from upcycle.currency import HttpRateProvider, RateProvider, convert
from upcycle.errors import NotFoundError
from upcycle.models import (
    Colour,
    Currency,
    Item,
    ItemCondition,
    Listing,
    Review,
    Sale,
    Size,
    Store,
    User,
    Username,
)

logger = logging.getLogger(__name__)


class MarketplaceRegistry:
    """Owns the store, its listings and every registered user.

    Usernames on listings, sales and reviews are loose references: nothing
    requires them to match a registered user. Collections only grow.

    With ``strict_sales`` set, ``record_sale`` raises ``NotFoundError`` for an
    unregistered buyer. Otherwise the sale is returned but recorded nowhere.
    """

    def __init__(
        self,
        store: Store,
        rate_provider: RateProvider,
        strict_sales: bool = False,
    ) -> None:
        self.store = store
        self.users: list[User] = []
        self.rate_provider = rate_provider
        self.strict_sales = strict_sales

    # ── writes ────────────────────────────────────────────────────────────────

    def register_user(self, username: str, email: str, first_name: str, last_name: str) -> User:
        # Duplicate usernames are accepted and become independent records
        user = User(
            username=Username(username),
            email=email,
            first_name=first_name,
            last_name=last_name,
        )
        self.users.append(user)
        logger.debug("Registered user %s", username)
        return user

    def create_listing(
        self,
        item: Item,
        seller_username: str,
        image_url: Optional[str] = None,
        seller_location: Optional[str] = None,
        seller_rating: Optional[float] = None,
    ) -> Listing:
        listing = Listing(
            item=item,
            image_url=image_url,
            seller_username=Username(seller_username),
            seller_location=seller_location,
            seller_rating=seller_rating,
        )
        self.store.listings.append(listing)
        logger.debug("Listed '%s' for %s", item.title, seller_username)
        return listing

    def record_sale(
        self,
        item: Item,
        buyer_username: str,
        seller_username: str,
        sale_price: float,
        date: datetime,
    ) -> Sale:
        buyer = self.get_user(buyer_username)
        if buyer is None and self.strict_sales:
            raise NotFoundError("Buyer", buyer_username)

        sale = Sale(
            item=item.model_copy(),
            buyer_username=Username(buyer_username),
            seller_username=Username(seller_username),
            sale_price=sale_price,
            date=date,
        )

        if buyer is None:
            logger.warning(
                "Buyer '%s' is not registered; sale of '%s' was not recorded",
                buyer_username, item.title,
            )
            return sale

        buyer.add_sale(sale)
        # The seller's history shares the same Sale object
        seller = self.get_user(seller_username)
        if seller is not None:
            seller.add_sale(sale)
        else:
            logger.debug("Seller '%s' is not registered; sale kept on buyer only", seller_username)
        return sale

    def add_review(
        self,
        buyer_username: str,
        seller_username: str,
        rating: float,
        comment: str,
        created_at: datetime,
    ) -> Review:
        # Reviews are handed back to the caller and not kept here
        return Review(
            buyer_username=Username(buyer_username),
            seller_username=Username(seller_username),
            rating=rating,
            comment=comment,
            created_at=created_at,
        )

    # ── reads ─────────────────────────────────────────────────────────────────

    def get_user(self, username: str) -> Optional[User]:
        return next((u for u in self.users if u.username == username), None)

    def list_users(self) -> list[User]:
        return list(self.users)

    def get_store_listings(
        self,
        size: Optional[Size] = None,
        condition: Optional[ItemCondition] = None,
        colour: Optional[Colour] = None,
    ) -> list[Listing]:
        return [
            listing for listing in self.store.listings
            if (size is None or listing.item.size == size)
            and (condition is None or listing.item.condition == condition)
            and (colour is None or listing.item.colour == colour)
        ]

    def get_seller_listings(self, seller_username: str) -> list[Listing]:
        return [
            listing for listing in self.store.listings
            if listing.seller_username == seller_username
        ]

    def get_buyer_sales(self, buyer_username: str) -> list[Sale]:
        return [s for u in self.users if u.username == buyer_username for s in u.sales]

    def get_seller_sales(self, seller_username: str) -> list[Sale]:
        return [s for u in self.users if u.username == seller_username for s in u.sales]

    # ── aggregates ────────────────────────────────────────────────────────────
    # Prices are summed as-is; listings in different currencies are not normalised.

    def get_store_revenue(self) -> float:
        """Listing-book value of the store, not realised sales."""
        return sum((listing.item.price for listing in self.store.listings), 0.0)

    def get_seller_revenue(self, seller_username: str) -> float:
        listings = self.get_seller_listings(seller_username)
        return sum((listing.item.price for listing in listings), 0.0)

    def get_buyer_expenditure(self, buyer_username: str) -> float:
        return sum((s.sale_price for s in self.get_buyer_sales(buyer_username)), 0.0)

    def convert(self, amount: float, from_currency: Currency, to_currency: Currency) -> float:
        return convert(amount, from_currency, to_currency, self.rate_provider)

    # ── lifecycle ─────────────────────────────────────────────────────────────

    def close(self) -> None:
        close = getattr(self.rate_provider, "close", None)
        if callable(close):
            close()

    def __enter__(self) -> "MarketplaceRegistry":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def create_registry(
    settings: Optional[Settings] = None,
    rate_provider: Optional[RateProvider] = None,
) -> MarketplaceRegistry:
    settings = settings or Settings()
    store = Store(
        name=settings.store_name,
        description=settings.store_description,
        website_url=settings.store_website_url,
    )
    if rate_provider is None:
        rate_provider = HttpRateProvider(settings.rate_api_url, settings.rate_timeout_seconds)
    return MarketplaceRegistry(store, rate_provider, strict_sales=settings.strict_sales)
