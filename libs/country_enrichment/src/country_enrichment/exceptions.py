"""Exceptions for World Bank API helpers."""


class WorldBankAPIError(Exception):
    """Base exception for World Bank API errors."""

    pass


class WorldBankNetworkError(WorldBankAPIError):
    """Raised when a request fails at transport level, times out or returns a non-200 status."""

    pass


class WorldBankDecodeError(WorldBankAPIError):
    """Raised when a response body is not JSON or does not match the expected schema."""

    pass


class InvalidCountryCodeError(WorldBankAPIError, ValueError):
    """Raised when a provider code cannot be used to build an indicator URL."""

    def __init__(self, code: str):
        super().__init__(f"Invalid country code: {code!r}")
        self.code = code
