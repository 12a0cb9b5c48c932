"""
FastAPI dependencies giving endpoints access to the services.

Services are created once per application at startup (see
``main.create_app``) and kept on ``app.state.services`` under the
resource name.
"""

from typing import Callable

from fastapi import Request

from ..services import ResourceService, UserService


def service_dependency(resource: str) -> Callable[[Request], ResourceService]:
    """Return a dependency that yields the service registered for ``resource``."""

    def _get_service(request: Request) -> ResourceService:
        return request.app.state.services[resource]

    _get_service.__name__ = f"get_{resource}_service"
    return _get_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.services["users"]
