"""Administrative actions: test notifications and on-demand jobs."""

import logging
from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from gametracker.application.use_cases.notifications import (
    NotificationConfigurationError,
    NotificationDispatcher,
    send_test_notification,
)
from gametracker.application.use_cases.prices import run_price_refresh
from gametracker.application.use_cases.releases import run_reminder_sweep
from gametracker.application.use_cases.users import sync_directory_users
from gametracker.domain.entities import User
from gametracker.infrastructure.database import get_db
from gametracker.infrastructure.directory import DirectoryClient
from gametracker.interfaces.api.dependencies import (
    get_directory,
    get_dispatcher,
    get_session_factory,
    require_admin,
)
from gametracker.interfaces.api.schemas import (
    DirectorySyncRead,
    PriceRefreshSummaryRead,
    SweepSummaryRead,
    TestNotificationRequest,
    TestNotificationResponse,
)

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger(__name__)


@router.post("/test-notification", response_model=TestNotificationResponse)
async def post_test_notification(
    payload: TestNotificationRequest,
    current_user: User = Depends(require_admin),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
):
    """Send a notification to the calling admin and report every channel."""

    try:
        sent = await send_test_notification(
            dispatcher,
            user=current_user,
            service=payload.service,
            game_id=payload.game_id,
            game_name=payload.game_name,
            release_date=payload.release_date,
            kind=payload.kind,
        )
    except NotificationConfigurationError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return sent.as_dict()


@router.post("/check-releases", response_model=SweepSummaryRead)
async def check_releases(
    current_user: User = Depends(require_admin),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
):
    """Run the release sweep now (same code path as the daily job)."""

    logger.info("Release sweep requested by %s", current_user.username)
    summary = await run_reminder_sweep(session_factory=session_factory, dispatcher=dispatcher)
    return summary.as_dict()


@router.post("/refresh-prices", response_model=PriceRefreshSummaryRead)
async def refresh_prices(
    current_user: User = Depends(require_admin),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
):
    logger.info("Price refresh requested by %s", current_user.username)
    summary = await run_price_refresh(session_factory=session_factory)
    return summary.as_dict()


@router.post("/directory-sync", response_model=DirectorySyncRead)
def directory_sync(
    current_user: User = Depends(require_admin),
    db: Session = Depends(get_db),
    directory: DirectoryClient = Depends(get_directory),
):
    """Refresh display name and email of every directory-sourced user."""

    logger.info("Directory sync requested by %s", current_user.username)
    try:
        report = sync_directory_users(db, directory=directory)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return report.as_dict()
