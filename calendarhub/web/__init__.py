"""HTTP API for CalendarHub."""

from .middleware import correlation_id_middleware, get_request_id
from .routes import register_api_routes
from .server import build_controller, create_app, serve

__all__ = [
    "build_controller",
    "correlation_id_middleware",
    "create_app",
    "get_request_id",
    "register_api_routes",
    "serve",
]
