"""Error taxonomy shared by the services and the HTTP layer.

Every error carries the HTTP status it maps to and a stable ``error`` code;
``to_dict`` renders the JSON body returned to clients.
"""

from __future__ import annotations

from typing import Any


class CityDashError(Exception):
    status_code: int = 500
    error: str = "internal_error"
    default_message: str = "An unexpected error occurred. Please try again later."

    def __init__(self, message: str | None = None, *, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.error, "message": self.message}


class ValidationError(CityDashError):
    """Rejected input; raised before any upstream request is made."""

    status_code = 400
    error = "validation_error"
    default_message = "Please provide a valid city name."


class UpstreamError(CityDashError):
    """Base for failures of a single upstream call."""

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        self.service = service
        self.detail = detail
        super().__init__(message, status_code=status_code)


class UpstreamNotFound(UpstreamError):
    status_code = 404
    error = "city_not_found"
    default_message = "The requested city could not be found."


class UpstreamAuthError(UpstreamError):
    # Upstream detail is logged, never returned.
    status_code = 500
    error = "configuration_error"
    default_message = "The service is misconfigured. Please try again later."


class UpstreamTimeout(UpstreamError):
    status_code = 504
    error = "upstream_timeout"

    def __init__(self, service: str, *, detail: str | None = None) -> None:
        super().__init__(
            service,
            f"{service} service is taking too long to respond.",
            detail=detail,
        )


class UpstreamGenericError(UpstreamError):
    status_code = 502
    error = "upstream_error"

    def __init__(
        self,
        service: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        if status_code is not None and not 400 <= status_code <= 599:
            status_code = None
        super().__init__(
            service,
            f"Unable to fetch {service.lower()} data at this time.",
            status_code=status_code,
            detail=detail,
        )


class UpstreamPayloadError(UpstreamGenericError):
    """The upstream answered 2xx with a body that does not match its schema."""


class NoDataAvailable(CityDashError):
    status_code = 404
    error = "no_data_available"

    def __init__(self, city: str) -> None:
        self.city = city
        super().__init__(f'Unable to fetch data for "{city}". Please check the city name.')


class InternalError(CityDashError):
    pass
