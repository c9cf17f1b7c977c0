"""
FastAPI dependencies - injection for services and auth (SOLID: Dependency Inversion).
Challenge: Reusable auth, consistent error responses.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from inventory_api.container import Container
from inventory_api.core.exceptions import InvalidTokenError
from inventory_api.domain.models import SessionClaims
from inventory_api.services.auth_service import AuthService
from inventory_api.services.item_service import ItemService

security = HTTPBearer(auto_error=False)


def get_container(request: Request) -> Container:
    return request.app.state.container


def get_auth_service(container: Annotated[Container, Depends(get_container)]) -> AuthService:
    return container.auth_service


def get_item_service(container: Annotated[Container, Depends(get_container)]) -> ItemService:
    return container.item_service


def get_current_claims(
    auth: Annotated[AuthService, Depends(get_auth_service)],
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> SessionClaims:
    """Resolve Bearer JWT to verified claims. Raises 401 if missing, invalid or expired."""
    if not credentials:
        raise InvalidTokenError("authentication token missing or invalid")
    return auth.validate_token(credentials.credentials)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
ItemServiceDep = Annotated[ItemService, Depends(get_item_service)]
CurrentClaims = Annotated[SessionClaims, Depends(get_current_claims)]
