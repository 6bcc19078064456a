"""
Domain exceptions raised by the service layer.

They subclass ``ValueError`` so routes can keep catching ``ValueError``;
anything that escapes a route is rendered by the handler registered in
``navandex.utils.error_handlers``.
"""


class ServiceError(ValueError):
    """Base class for all service errors (400)."""

    status_code = 400

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(ServiceError):
    """Resource not found (404)."""

    status_code = 404


class PermissionDeniedError(ServiceError):
    """Caller may not perform the action (403)."""

    status_code = 403

    def __init__(self, message: str = "Permission denied"):
        super().__init__(message)


class ConflictError(ServiceError):
    """Request conflicts with current state (409)."""

    status_code = 409


class InvalidTransitionError(ServiceError):
    """Order status change is not allowed (400)."""

    def __init__(self, current, new):
        current = getattr(current, "value", current)
        new = getattr(new, "value", new)
        super().__init__(f"Cannot transition from {current} to {new}")
        self.current = current
        self.new = new


class ExternalServiceError(ServiceError):
    """Upstream service (storage, scraper, messaging) failed (502)."""

    status_code = 502
