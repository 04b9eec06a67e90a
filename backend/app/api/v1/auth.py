"""
Authentication API endpoints.

Handles registration, login with JWT token generation, and the role gate
dependencies used by every other router.
"""

import re
from typing import Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from pydantic import BaseModel, Field, field_validator

from app.api.schemas import CamelModel, UserRead, partial_changes
from app.core.config import settings
from app.core.constants import UserRole
from app.core.security import create_access_token, decode_access_token, verify_password
from app.models import User
from app.services import DuplicateEntityError, register_user, update_profile
from app.storage import Storage, get_storage

router = APIRouter()

# OAuth2 scheme for token authentication
oauth2_scheme = OAuth2PasswordBearer(tokenUrl=f"{settings.API_PREFIX}/auth/login")

EMAIL_PATTERN = r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$"


# ============== Pydantic Schemas ==============


class UserRegister(CamelModel):
    """Schema for user registration."""

    username: str = Field(min_length=3)
    email: str
    password: str = Field(min_length=6)
    full_name: str = Field(min_length=1)
    role: UserRole = UserRole.CANDIDATE
    position: Optional[str] = None
    profile_image: Optional[str] = None
    admin_key: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate email format."""
        if not re.match(EMAIL_PATTERN, v):
            raise ValueError("Invalid email format")
        return v.lower()


class ProfileUpdate(CamelModel):
    """Schema for profile updates. Password and role cannot change here."""

    full_name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = None
    position: Optional[str] = None
    profile_image: Optional[str] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not re.match(EMAIL_PATTERN, v):
            raise ValueError("Invalid email format")
        return v.lower() if v else v


class Token(BaseModel):
    """Schema for JWT token response."""

    access_token: str
    token_type: str = "bearer"


# ============== Helper Functions ==============


def authenticate_user(storage: Storage, login: str, password: str) -> Optional[User]:
    """Authenticate by username or email plus password."""
    user = storage.get_user_by_username(login) or storage.get_user_by_email(login.lower())
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    storage: Storage = Depends(get_storage),
) -> User:
    """
    Dependency to get the current authenticated user from JWT token.

    Raises HTTPException if token is invalid or user not found.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    payload = decode_access_token(token)
    if payload is None:
        raise credentials_exception

    email: Optional[str] = payload.get("sub")
    if email is None:
        raise credentials_exception

    user = storage.get_user_by_email(email)
    if user is None:
        raise credentials_exception

    return user


def require_roles(*roles: UserRole) -> Callable:
    """Dependency factory: the current user must hold one of ``roles``."""
    allowed = {role.value for role in roles}
    label = " or ".join(sorted(allowed))

    async def role_gate(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. {label.capitalize()} role required.",
            )
        return current_user

    return role_gate


# ============== API Endpoints ==============


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def register(user_data: UserRegister, storage: Storage = Depends(get_storage)):
    """
    Register a new user.

    Candidate accounts get a linked candidate record. Admin accounts need the
    configured admin registration key.
    """
    if user_data.role == UserRole.ADMIN.value and user_data.admin_key != settings.ADMIN_REGISTRATION_KEY:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Invalid admin registration key",
        )

    try:
        return register_user(
            storage,
            username=user_data.username,
            email=user_data.email,
            password=user_data.password,
            full_name=user_data.full_name,
            role=user_data.role,
            position=user_data.position,
            profile_image=user_data.profile_image,
        )
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/login", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    storage: Storage = Depends(get_storage),
):
    """
    Login and get JWT access token.

    Uses OAuth2 password flow. Send username (or email) and password
    as form data.
    """
    user = authenticate_user(storage, form_data.username, form_data.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return Token(access_token=create_access_token(user.email, role=user.role))


@router.get("/me", response_model=UserRead)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get current authenticated user profile."""
    return current_user


@router.patch("/me", response_model=UserRead)
async def update_me(
    profile: ProfileUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    """Update the current user's profile fields."""
    changes = partial_changes(profile, required={"full_name", "email"})
    try:
        return update_profile(storage, current_user, changes)
    except DuplicateEntityError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
