"""Endpoints for the authenticated user's own library."""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from gametracker.application.use_cases.library import (
    add_or_update_game,
    list_games,
    refresh_library_metadata,
    remove_game,
)
from gametracker.application.use_cases.notifications import NotificationDispatcher
from gametracker.domain.entities import TrackedGame, User
from gametracker.infrastructure.database import get_db
from gametracker.interfaces.api.dependencies import get_current_user, get_dispatcher
from gametracker.interfaces.api.schemas import (
    MetadataRefreshRead,
    TrackedGameCreate,
    TrackedGameRead,
)

router = APIRouter(prefix="/library", tags=["library"])
logger = logging.getLogger(__name__)


async def announce_library_events(
    dispatcher: NotificationDispatcher,
    events: tuple[str, ...],
    game: TrackedGame,
    user: User,
) -> None:
    for event in events:
        try:
            await dispatcher.dispatch(event, game, user, status=game.status)
        except Exception:
            logger.exception("Could not announce %s for %s/%s", event, user.username, game.game_id)


@router.get("/", response_model=list[TrackedGameRead])
def read_library(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return [TrackedGameRead.model_validate(game) for game in list_games(db, current_user.username)]


@router.post("/", response_model=TrackedGameRead)
def save_game(
    payload: TrackedGameCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """Add a game to the library or change its status."""

    try:
        change = add_or_update_game(
            db,
            username=current_user.username,
            game_id=payload.game_id,
            name=payload.name,
            status=payload.status,
            release_date=payload.release_date,
            cover_url=payload.cover_url,
            external_pricing_id=payload.external_pricing_id,
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc

    if change.events:
        background_tasks.add_task(
            announce_library_events, dispatcher, change.events, change.game, current_user
        )
    return TrackedGameRead.model_validate(change.game)


@router.delete("/{game_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_game(
    game_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        remove_game(db, username=current_user.username, game_id=game_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/refresh-metadata", response_model=MetadataRefreshRead)
async def refresh_metadata(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Re-query the catalogs for every game and store newer metadata."""

    try:
        report = await refresh_library_metadata(db, username=current_user.username)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    return report.as_dict()
