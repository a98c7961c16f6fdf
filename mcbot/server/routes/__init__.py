"""HTTP route handlers."""

from .registration_routes import RegistrationRoutes

__all__ = ["RegistrationRoutes"]
