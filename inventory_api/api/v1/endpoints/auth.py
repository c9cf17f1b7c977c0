"""
Auth endpoints - registration and login (RESTful API).
Challenge: Secure auth, validation, clear status codes.
Mounted at the application root: POST /register, POST /login.
"""

from fastapi import APIRouter, status

from inventory_api.core.dependencies import AuthServiceDep
from inventory_api.schemas.user import LoginRequest, RegisterRequest, RegisterResponse, TokenResponse

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
async def register(auth: AuthServiceDep, data: RegisterRequest):
    """Create new user. Returns id and username only."""
    user = await auth.register(data.username, data.password)
    return RegisterResponse(id=user.id, username=user.username)


@router.post("/login", response_model=TokenResponse)
async def login(auth: AuthServiceDep, data: LoginRequest):
    """Authenticate and return JWT."""
    token = await auth.login(data.username, data.password)
    return TokenResponse(token=token)
