"""Services for gita-pro.

Provides the verse API client and the verse reveal service.
"""

from gita_pro.services.gita_api import (
    EmptyResponseError,
    GitaApiClient,
    Verse,
    VerseDecodeError,
    VerseFetchError,
    VerseNetworkError,
)
from gita_pro.services.reveal import (
    AttemptOutcome,
    RetriesExhaustedError,
    RevealAttempt,
    RevealProgress,
    VerseRevealService,
)

__all__ = [
    "AttemptOutcome",
    "EmptyResponseError",
    "GitaApiClient",
    "RetriesExhaustedError",
    "RevealAttempt",
    "RevealProgress",
    "Verse",
    "VerseDecodeError",
    "VerseFetchError",
    "VerseNetworkError",
    "VerseRevealService",
]
