class MarketplaceError(Exception):
    """Base class for every error raised by the marketplace."""


class NotFoundError(MarketplaceError, LookupError):
    def __init__(self, kind: str, key: str) -> None:
        self.kind = kind
        self.key = key
        super().__init__(f"{kind} '{key}' not found")


class RateUnavailableError(MarketplaceError):
    """The rate provider could not supply a conversion rate."""


class InvalidEnumValueError(MarketplaceError, ValueError):
    def __init__(self, enum_name: str, value: object) -> None:
        self.enum_name = enum_name
        self.value = value
        super().__init__(f"{value!r} is not a valid {enum_name}")
