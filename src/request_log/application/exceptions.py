from __future__ import annotations


class RequestLogError(Exception):
    """Base request-log error."""

    def __init__(self, detail: str = "") -> None:
        self.detail = detail
        super().__init__(detail)


class ConfigurationError(RequestLogError):
    pass


class MissingResolverError(ConfigurationError):
    """A custom token was referenced but has no resolver at format time."""

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"no resolver registered for custom token ':{token}'")
