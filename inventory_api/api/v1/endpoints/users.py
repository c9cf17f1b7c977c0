"""
User endpoints - profile of the authenticated caller.
"""

from fastapi import APIRouter

from inventory_api.core.dependencies import AuthServiceDep, CurrentClaims
from inventory_api.schemas.user import UserResponse

router = APIRouter()


@router.get("/me", response_model=UserResponse, response_model_exclude_none=True)
async def read_me(auth: AuthServiceDep, claims: CurrentClaims):
    """Resolve the token subject to the stored user."""
    user = await auth.get_user(claims.user_id)
    return UserResponse.model_validate(user)
