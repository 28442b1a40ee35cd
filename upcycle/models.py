from pydantic import BaseModel, ConfigDict, Field
from enum import Enum
from datetime import datetime
from typing import NewType, Optional, TypeVar

from upcycle.errors import InvalidEnumValueError

Username = NewType("Username", str)


class Colour(str, Enum):
    BLACK = "black"
    WHITE = "white"
    RED = "red"
    GREEN = "green"
    BLUE = "blue"
    ORANGE = "orange"
    YELLOW = "yellow"
    PINK = "pink"
    PURPLE = "purple"
    BROWN = "brown"
    GREY = "grey"


class Size(str, Enum):
    EXTRA_SMALL = "extraSmall"
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"
    EXTRA_LARGE = "extraLarge"


class ItemCondition(str, Enum):
    NEW = "new"
    USED = "used"
    VINTAGE = "vintage"


class Currency(str, Enum):
    USD = "usd"
    AUD = "aud"
    GBP = "gbp"
    CAD = "cad"
    EUR = "eur"


E = TypeVar("E", bound=Enum)


def parse_enum(enum_cls: type[E], raw: object) -> E:
    """Decode external input into a member of ``enum_cls``.

    Raises InvalidEnumValueError for anything outside the member set.
    """
    if isinstance(raw, enum_cls):
        return raw
    try:
        return enum_cls(raw)
    except ValueError:
        raise InvalidEnumValueError(enum_cls.__name__, raw) from None


# ── Catalogue ─────────────────────────────────────────────────────────────────

class Item(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str
    size: Optional[Size] = None
    colour: Optional[Colour] = None
    condition: ItemCondition
    price: float = Field(ge=0)
    currency: Currency


class Listing(BaseModel):
    model_config = ConfigDict(frozen=True)

    item: Item
    image_url: Optional[str] = None
    seller_username: Username
    seller_location: Optional[str] = None
    seller_rating: Optional[float] = None  # conventionally 0-5, not enforced


class Store(BaseModel):
    name: str
    description: str
    listings: list[Listing] = Field(default_factory=list)  # append-only
    website_url: Optional[str] = None


# ── People & history ──────────────────────────────────────────────────────────

class Sale(BaseModel):
    model_config = ConfigDict(frozen=True)

    item: Item  # snapshot taken when the sale is recorded
    buyer_username: Username
    seller_username: Username
    sale_price: float
    date: datetime


class User(BaseModel):
    username: Username
    email: str
    first_name: str
    last_name: str
    sales: list[Sale] = Field(default_factory=list)

    def add_sale(self, sale: Sale) -> None:
        self.sales.append(sale)


class Review(BaseModel):
    model_config = ConfigDict(frozen=True)

    buyer_username: Username
    seller_username: Username
    rating: float
    comment: str
    created_at: datetime
