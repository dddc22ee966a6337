from fastapi import APIRouter, Depends, status

from src.app.use_cases.auth import AuthenticatedUser, UserResponse
from src.depends import get_current_user

router = APIRouter(tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK, response_model=UserResponse)
async def get_me(current_user: AuthenticatedUser = Depends(get_current_user)):
    """
    Current User

    Returns the identity resolved from the access token.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired token, or user deleted
    """
    return current_user.to_response()
