"""Routes to manage users and the authenticated user's settings."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from gametracker.application.use_cases.users import (
    create_user as create_user_uc,
    delete_user as delete_user_uc,
    list_users as list_users_uc,
    update_user as update_user_uc,
)
from gametracker.domain.entities import User
from gametracker.infrastructure.database import get_db
from gametracker.infrastructure.repositories import UserRepository
from gametracker.interfaces.api.dependencies import get_current_user, require_admin
from gametracker.interfaces.api.schemas import (
    SharingFlagUpdate,
    UserCreate,
    UserRead,
    UserSettingsUpdate,
    UserSummaryRead,
    UserUpdate,
)

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    user_in: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    try:
        user = create_user_uc(
            db,
            username=user_in.username,
            password=user_in.password,
            display_name=user_in.display_name,
            email=user_in.email,
            can_manage_users=user_in.can_manage_users,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    logger.info("%s created user %s", current_user.username, user.username)
    return UserRead.model_validate(user)


@router.get("/", response_model=list[UserRead])
def list_users(
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    return [UserRead.model_validate(user) for user in list_users_uc(db, skip=skip, limit=limit)]


@router.get("/all", response_model=list[UserSummaryRead])
def list_user_summaries(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    """List every account by name, for picking whom to share with."""

    users = UserRepository(db).list(limit=None)
    return [UserSummaryRead.model_validate(user) for user in users]


@router.get("/me", response_model=UserRead)
def read_current_user(current_user: User = Depends(get_current_user)):
    return UserRead.model_validate(current_user)


@router.put("/me/settings", response_model=UserRead)
def update_my_settings(
    payload: UserSettingsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update display name, email and personal push topic."""

    try:
        user = update_user_uc(
            db, user_id=current_user.id, **payload.model_dump(exclude_unset=True)
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return UserRead.model_validate(user)


@router.put("/me/sharing", response_model=UserRead)
def update_my_sharing(
    payload: SharingFlagUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Flag whether the library is listed among the shared libraries."""

    user = update_user_uc(db, user_id=current_user.id, shares_library=payload.shares_library)
    return UserRead.model_validate(user)


@router.put("/{user_id}", response_model=UserRead)
def update_user(
    user_id: int,
    user_in: UserUpdate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    try:
        user = update_user_uc(db, user_id=user_id, **user_in.model_dump(exclude_unset=True))
    except ValueError as exc:
        detail = str(exc)
        code = status.HTTP_404_NOT_FOUND if detail == "User not found" else status.HTTP_400_BAD_REQUEST
        raise HTTPException(status_code=code, detail=detail) from exc
    return UserRead.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    try:
        delete_user_uc(db, user_id, acting_user_id=current_user.id)
    except ValueError as exc:
        detail = str(exc)
        code = status.HTTP_404_NOT_FOUND if detail == "User not found" else status.HTTP_400_BAD_REQUEST
        raise HTTPException(status_code=code, detail=detail) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
