"""Routes for sharing read-only views of libraries."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from gametracker.application.use_cases.sharing import (
    get_shared_library,
    list_public_libraries,
    list_shared_with,
    list_shared_with_me,
    revoke_share,
    set_library_shares,
)
from gametracker.domain.entities import User
from gametracker.infrastructure.database import get_db
from gametracker.interfaces.api.dependencies import get_current_user
from gametracker.interfaces.api.schemas import (
    SharedWithMeRead,
    ShareListRead,
    ShareListUpdate,
    TrackedGameRead,
    UserSummaryRead,
)

router = APIRouter(prefix="/sharing", tags=["sharing"])


@router.get("/", response_model=ShareListRead)
def read_my_shares(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return ShareListRead(to_users=list_shared_with(db, current_user.username))


@router.put("/", response_model=ShareListRead)
def replace_my_shares(
    payload: ShareListUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        to_users = set_library_shares(
            db, owner=current_user.username, to_usernames=payload.to_users
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return ShareListRead(to_users=to_users)


@router.get("/with-me", response_model=list[SharedWithMeRead])
def read_shared_with_me(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [
        SharedWithMeRead(
            from_user=share.from_username,
            display_name=owner.display_name if owner else None,
            shared_at=share.shared_at,
        )
        for share, owner in list_shared_with_me(db, current_user.username)
    ]


@router.delete("/with-me/{owner}", status_code=status.HTTP_204_NO_CONTENT)
def drop_shared_library(
    owner: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        revoke_share(db, viewer=current_user.username, owner=owner)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/libraries", response_model=list[UserSummaryRead])
def read_public_libraries(
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    return [UserSummaryRead.model_validate(user) for user in list_public_libraries(db)]


@router.get("/{owner}/library", response_model=list[TrackedGameRead])
def read_shared_library(
    owner: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        games = get_shared_library(db, viewer=current_user.username, owner=owner)
    except PermissionError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc
    return [TrackedGameRead.model_validate(game) for game in games]
