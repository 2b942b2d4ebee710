"""HTTP client for the Bhagavad Gita verse API.

Provides GitaApiClient for looking up a single verse by chapter and verse
index on the RapidAPI-hosted Bhagavad Gita API, and the Verse value it
returns. Every failure is mapped onto the VerseFetchError hierarchy so
callers can treat lookups uniformly.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "GITA_RAPIDAPI_KEY"

# Remote record key -> Verse attribute
FIELD_MAP = {
    "verseNumber": "verse_number",
    "sanskrit verse": "sanskrit_text",
    "english transliteration": "transliteration",
    "word meanings": "word_meanings",
    "translation": "translation",
    "purport": "commentary",
}


class VerseFetchError(Exception):
    """Error fetching a verse from the verse API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class VerseNetworkError(VerseFetchError):
    """The verse API could not be reached or failed at the transport level."""


class EmptyResponseError(VerseFetchError):
    """The verse API returned no payload."""


class VerseDecodeError(VerseFetchError):
    """The payload did not match the verse schema.

    Also raised when the requested chapter/verse pair is not a real verse.
    """


@dataclass(frozen=True)
class Verse:
    """A single Bhagavad Gita verse.

    Two verses are equal when their verse numbers are equal, whatever the
    other fields hold.

    Attributes:
        verse_number: Chapter.verse identifier (e.g., "2.47")
        sanskrit_text: Verse in Devanagari
        transliteration: English transliteration
        word_meanings: Word-by-word meanings
        translation: English translation
        commentary: Purport
    """

    verse_number: str
    sanskrit_text: str = field(default="", compare=False)
    transliteration: str = field(default="", compare=False)
    word_meanings: str = field(default="", compare=False)
    translation: str = field(default="", compare=False)
    commentary: str = field(default="", compare=False)

    @classmethod
    def from_api(cls, record: Any) -> "Verse":
        """Create a Verse from a verse API record.

        Args:
            record: One verse record from the API response

        Returns:
            Verse instance

        Raises:
            VerseDecodeError: If the record is not an object or a field is
                missing or not a string
        """
        if not isinstance(record, dict):
            raise VerseDecodeError(f"Expected verse object, got {type(record).__name__}")

        values = {}
        for remote_key, attribute in FIELD_MAP.items():
            value = record.get(remote_key)
            if not isinstance(value, str):
                raise VerseDecodeError(f"Verse record missing field '{remote_key}'")
            values[attribute] = value

        if not values["verse_number"].strip():
            raise VerseDecodeError("Verse record has an empty verseNumber")

        return cls(**values)

    def to_dict(self) -> Dict[str, str]:
        """Convert Verse to dictionary.

        Returns:
            Dictionary representation of the verse
        """
        return {
            "verse_number": self.verse_number,
            "sanskrit_text": self.sanskrit_text,
            "transliteration": self.transliteration,
            "word_meanings": self.word_meanings,
            "translation": self.translation,
            "commentary": self.commentary,
        }


class GitaApiClient:
    """HTTP client for the Bhagavad Gita verse API.

    Authenticates with the x-rapidapi-host and x-rapidapi-key headers. The key
    comes from the GITA_RAPIDAPI_KEY environment variable.

    Attributes:
        base_url: Base URL of the verse API
        api_host: Value sent in the x-rapidapi-host header
        timeout: Request timeout in seconds
    """

    def __init__(self, base_url: str, api_host: str, timeout: int = 30):
        """Initialize the verse API client.

        Args:
            base_url: Base URL of the verse API
            api_host: RapidAPI host name
            timeout: Request timeout in seconds

        Raises:
            ValueError: If GITA_RAPIDAPI_KEY environment variable is not set
        """
        self.base_url = base_url.rstrip("/")
        self.api_host = api_host
        self.timeout = timeout

        self._api_key = os.environ.get(API_KEY_ENV_VAR)
        if not self._api_key:
            raise ValueError(
                f"{API_KEY_ENV_VAR} environment variable is not set. "
                "Set it to your RapidAPI key for the Bhagavad Gita API."
            )

    def _auth_headers(self) -> Dict[str, str]:
        """Get authentication headers."""
        return {
            "x-rapidapi-host": self.api_host,
            "x-rapidapi-key": self._api_key,
        }

    def fetch_verse(self, chapter: int, verse_index: int) -> Verse:
        """Look up a single verse.

        Args:
            chapter: Chapter number
            verse_index: Verse index within the chapter

        Returns:
            The first verse in the response

        Raises:
            VerseNetworkError: On connection errors, timeouts or server errors
            EmptyResponseError: If the response has no payload
            VerseDecodeError: If the payload is not a verse or the pair
                doesn't exist
        """
        url = f"{self.base_url}/{chapter}/{verse_index}"
        logger.debug(f"Requesting {url}")

        try:
            response = requests.get(
                url,
                headers=self._auth_headers(),
                timeout=self.timeout,
            )
        except requests.exceptions.ConnectionError as e:
            raise VerseNetworkError(f"Cannot connect to verse API at {self.base_url}: {e}")
        except requests.exceptions.Timeout as e:
            raise VerseNetworkError(f"Verse request timed out: {e}")
        except requests.exceptions.RequestException as e:
            raise VerseNetworkError(f"Verse request failed: {e}")

        status = response.status_code
        if status in (401, 403):
            raise VerseNetworkError("Authentication failed: Invalid API key", status_code=status)
        if status == 429:
            raise VerseNetworkError("Rate limited by verse API", status_code=429)
        if status >= 500:
            raise VerseNetworkError(f"Verse API error (HTTP {status})", status_code=status)
        if status >= 400:
            raise VerseDecodeError(
                f"No verse {chapter}.{verse_index} (HTTP {status})", status_code=status
            )

        return self._parse_verse_response(response.content)

    @staticmethod
    def _parse_verse_response(body: bytes) -> Verse:
        """Parse a verse lookup response body.

        Args:
            body: Raw response body

        Returns:
            Verse decoded from the first value of the JSON object
        """
        if not body or not body.strip():
            raise EmptyResponseError("No data received")

        try:
            data = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise VerseDecodeError(f"Invalid JSON response: {e}")

        if not isinstance(data, dict):
            raise VerseDecodeError(f"Expected JSON object, got {type(data).__name__}")

        if not data:
            raise EmptyResponseError("No verse found in the response")

        return Verse.from_api(next(iter(data.values())))
