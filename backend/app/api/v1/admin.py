"""
Admin API endpoints.

User management and the full activity log. Deleting a user is destructive:
their jobs, applications, interviews and candidate record go with them.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.schemas import ActivityRead, UserRead
from app.api.v1.auth import require_roles
from app.core.config import settings
from app.core.constants import UserRole
from app.models import User
from app.services import delete_user, get_recent_activities
from app.storage import Storage, get_storage

router = APIRouter()

admin_only = require_roles(UserRole.ADMIN)


@router.get("/users", response_model=list[UserRead])
async def list_users(
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(admin_only),
):
    return storage.list_users()


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_user(
    user_id: int,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(admin_only),
):
    """Delete a user and everything they own in one transaction."""
    if user_id == current_user.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admins cannot delete their own account",
        )

    if not delete_user(storage, user_id, actor_id=current_user.id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/activities", response_model=list[ActivityRead])
async def all_activities(
    limit: int = Query(default=settings.ADMIN_ACTIVITY_LIMIT, ge=1, le=1000),
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(admin_only),
):
    """Activity log across all users, newest first."""
    return get_recent_activities(storage, limit)
