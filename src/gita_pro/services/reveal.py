"""Verse reveal service for gita-pro.

Fetches a verse the user has not seen yet, records it as revealed, and reports
reveal progress. The verse source and the revealed-verse store are injected,
so the service works with GitaApiClient/StateClient in the CLI and with simple
fakes in tests.

A verse source has ``fetch_verse(chapter, verse_index) -> Verse`` and raises
VerseFetchError subclasses on failure. A store has
``load_revealed_verses() -> set[str]`` and ``save_revealed_verses(verses)``.
"""

import logging
import random
import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Optional

from gita_pro.services.gita_api import Verse, VerseFetchError

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_CHAPTER_COUNT = 18
# Flat upper bound on the verse index; short chapters simply miss
DEFAULT_MAX_VERSE_INDEX = 78
TOTAL_VERSES = 700


class AttemptOutcome(Enum):
    """Result of a single lookup inside a reveal."""

    SUCCESS = auto()
    DUPLICATE_SKIP = auto()
    TRANSIENT_FAILURE = auto()


@dataclass
class RevealAttempt:
    """Record of one lookup made while revealing a verse.

    Attributes:
        chapter: Sampled chapter
        verse_index: Sampled verse index
        outcome: What the lookup produced
        verse_number: Number of the verse returned, if any
        error: Error raised by the source, if any
    """

    chapter: int
    verse_index: int
    outcome: AttemptOutcome
    verse_number: Optional[str] = None
    error: Optional[VerseFetchError] = None


class RetriesExhaustedError(VerseFetchError):
    """No unrevealed verse was found within the attempt budget."""

    def __init__(self, attempts: list[RevealAttempt]):
        super().__init__(f"Failed to fetch verse after {len(attempts)} attempts")
        self.attempts = attempts


@dataclass(frozen=True)
class RevealProgress:
    """How many verses have been revealed out of the total."""

    revealed: int
    total: int = TOTAL_VERSES

    @property
    def fraction(self) -> float:
        """Revealed share of the total, capped at 1.0."""
        if self.total <= 0:
            return 0.0
        return min(self.revealed / self.total, 1.0)

    @property
    def label(self) -> str:
        """Short badge text (e.g., "12/700")."""
        return f"{self.revealed}/{self.total}"


class VerseRevealService:
    """Reveals verses the user hasn't seen and tracks them durably.

    The revealed set is loaded from the store once at construction and the
    full set is written back after every successful reveal. Numbers are only
    ever added, except by reset().

    Calls are expected one at a time. Concurrent reveals are not locked
    against each other and the last write to the store wins.
    """

    def __init__(
        self,
        source,
        store,
        rng: Optional[random.Random] = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        chapter_count: int = DEFAULT_CHAPTER_COUNT,
        max_verse_index: int = DEFAULT_MAX_VERSE_INDEX,
        total_verses: int = TOTAL_VERSES,
    ):
        """Initialize the reveal service.

        Args:
            source: Verse source with fetch_verse(chapter, verse_index)
            store: Revealed verse store
            rng: Random generator used to sample chapter/verse pairs
            max_attempts: Lookups per reveal before giving up
            chapter_count: Chapters are sampled from 1..chapter_count
            max_verse_index: Verse indexes are sampled from 1..max_verse_index
            total_verses: Total used for progress reporting

        Raises:
            ValueError: If a bound is less than 1
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        if chapter_count < 1 or max_verse_index < 1:
            raise ValueError("chapter_count and max_verse_index must be at least 1")

        self.source = source
        self.store = store
        self.rng = rng or random.Random()
        self.max_attempts = max_attempts
        self.chapter_count = chapter_count
        self.max_verse_index = max_verse_index
        self.total_verses = total_verses

        self._revealed: set[str] = set(store.load_revealed_verses())
        self.last_attempts: list[RevealAttempt] = []
        logger.info(f"Loaded {len(self._revealed)} revealed verses")

    def _draw_reference(self) -> tuple[int, int]:
        """Sample a (chapter, verse_index) pair."""
        chapter = self.rng.randint(1, self.chapter_count)
        verse_index = self.rng.randint(1, self.max_verse_index)
        return chapter, verse_index

    def _attempt(self) -> tuple[RevealAttempt, Optional[Verse]]:
        """Make one lookup and classify its outcome."""
        chapter, verse_index = self._draw_reference()
        logger.debug(f"Looking up verse {chapter}.{verse_index}")

        try:
            verse = self.source.fetch_verse(chapter, verse_index)
        except VerseFetchError as e:
            logger.warning(f"Lookup {chapter}.{verse_index} failed: {e}")
            return RevealAttempt(chapter, verse_index, AttemptOutcome.TRANSIENT_FAILURE, error=e), None

        if verse.verse_number in self._revealed:
            logger.info(f"Verse {verse.verse_number} already revealed, drawing again")
            return (
                RevealAttempt(
                    chapter, verse_index, AttemptOutcome.DUPLICATE_SKIP, verse_number=verse.verse_number
                ),
                None,
            )

        return (
            RevealAttempt(chapter, verse_index, AttemptOutcome.SUCCESS, verse_number=verse.verse_number),
            verse,
        )

    def fetch_unrevealed_verse(self) -> Verse:
        """Fetch a verse that hasn't been revealed and mark it revealed.

        Duplicates and failed lookups share one attempt budget. Each call
        starts with a fresh budget.

        Returns:
            The newly revealed verse

        Raises:
            RetriesExhaustedError: If every attempt was a duplicate or failed
        """
        attempts: list[RevealAttempt] = []
        self.last_attempts = attempts

        for _ in range(self.max_attempts):
            attempt, verse = self._attempt()
            attempts.append(attempt)

            if attempt.outcome is AttemptOutcome.SUCCESS:
                self._mark_revealed(verse.verse_number)
                logger.info(
                    f"Revealed verse {verse.verse_number} after {len(attempts)} attempt(s), "
                    f"{len(self._revealed)} revealed"
                )
                return verse

        duplicates = sum(1 for a in attempts if a.outcome is AttemptOutcome.DUPLICATE_SKIP)
        logger.error(
            f"No unrevealed verse after {len(attempts)} attempts "
            f"({duplicates} duplicate, {len(attempts) - duplicates} failed)"
        )
        raise RetriesExhaustedError(attempts)

    def _mark_revealed(self, verse_number: str) -> None:
        """Persist the revealed set plus one verse, then keep it in memory.

        The in-memory set only changes once the store has saved.
        """
        updated = self._revealed | {verse_number}
        self.store.save_revealed_verses(set(updated))
        self._revealed = updated

    def reveal_async(
        self, callback: Callable[[Optional[Verse], Optional[Exception]], None]
    ) -> threading.Thread:
        """Reveal a verse in a background thread.

        Args:
            callback: Called with (verse, None) on success or
                (None, error) when the reveal fails. Store failures are
                passed through as-is, exhaustion as RetriesExhaustedError.

        Returns:
            Thread running the reveal
        """

        def run_reveal():
            try:
                verse = self.fetch_unrevealed_verse()
            except Exception as e:
                logger.error(f"Background reveal failed: {e}")
                callback(None, e)
                return
            callback(verse, None)

        thread = threading.Thread(target=run_reveal, daemon=True)
        thread.start()
        return thread

    def revealed_count(self) -> int:
        """Number of verses revealed so far."""
        return len(self._revealed)

    def is_revealed(self, verse_number: str) -> bool:
        """Check whether a verse has been revealed.

        Args:
            verse_number: Verse number (e.g., "2.47")
        """
        return verse_number in self._revealed

    def progress(self) -> RevealProgress:
        """Current reveal progress."""
        return RevealProgress(revealed=len(self._revealed), total=self.total_verses)

    def reset(self) -> None:
        """Forget every revealed verse and persist the empty set."""
        logger.info(f"Resetting {len(self._revealed)} revealed verses")
        self.store.save_revealed_verses(set())
        self._revealed = set()
