from .admin import (
    ChannelOutcomeRead,
    DirectorySyncDetailRead,
    DirectorySyncRead,
    PriceRefreshSummaryRead,
    SweepSummaryRead,
    TestNotificationRequest,
    TestNotificationResponse,
)
from .auth import Token
from .game import (
    CatalogResultRead,
    MetadataRefreshRead,
    PriceRead,
    TrackedGameCreate,
    TrackedGameRead,
)
from .sharing import SharedWithMeRead, ShareListRead, ShareListUpdate
from .user import (
    SharingFlagUpdate,
    UserCreate,
    UserRead,
    UserSettingsUpdate,
    UserSummaryRead,
    UserUpdate,
)

__all__ = [
    "CatalogResultRead",
    "ChannelOutcomeRead",
    "DirectorySyncDetailRead",
    "DirectorySyncRead",
    "MetadataRefreshRead",
    "PriceRead",
    "PriceRefreshSummaryRead",
    "ShareListRead",
    "ShareListUpdate",
    "SharedWithMeRead",
    "SharingFlagUpdate",
    "SweepSummaryRead",
    "TestNotificationRequest",
    "TestNotificationResponse",
    "Token",
    "TrackedGameCreate",
    "TrackedGameRead",
    "UserCreate",
    "UserRead",
    "UserSettingsUpdate",
    "UserSummaryRead",
    "UserUpdate",
]
