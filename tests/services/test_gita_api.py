"""Tests for GitaApiClient and the Verse model."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from gita_pro.services.gita_api import (
    EmptyResponseError,
    GitaApiClient,
    Verse,
    VerseDecodeError,
    VerseFetchError,
    VerseNetworkError,
)

BASE_URL = "https://bhagavad-gita-api.p.rapidapi.com"
HOST = "bhagavad-gita-api.p.rapidapi.com"


def mock_response(body, status_code: int = 200) -> MagicMock:
    """Build a fake requests.Response with the given body."""
    response = MagicMock()
    response.status_code = status_code
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    response.content = body
    return response


@pytest.fixture
def client(api_key_env):
    return GitaApiClient(BASE_URL, HOST)


class TestVerse:
    """Tests for the Verse value."""

    def test_from_api_maps_fields(self, sample_api_record):
        """Remote keys map onto entity fields."""
        verse = Verse.from_api(sample_api_record)

        assert verse.verse_number == "2.47"
        assert verse.sanskrit_text.startswith("कर्मण्ये")
        assert verse.transliteration.startswith("karmaṇy")
        assert verse.word_meanings.startswith("karmaṇi")
        assert verse.translation.startswith("You have a right")
        assert verse.commentary == "There are three considerations here."

    def test_from_api_missing_field(self, sample_api_record):
        """A missing field is a decode error."""
        del sample_api_record["purport"]

        with pytest.raises(VerseDecodeError, match="purport"):
            Verse.from_api(sample_api_record)

    def test_from_api_non_string_field(self, sample_api_record):
        """A non-string field is a decode error."""
        sample_api_record["verseNumber"] = 2.47

        with pytest.raises(VerseDecodeError):
            Verse.from_api(sample_api_record)

    def test_from_api_not_an_object(self):
        """A record that isn't an object is a decode error."""
        with pytest.raises(VerseDecodeError, match="list"):
            Verse.from_api(["2.47"])

    def test_equality_uses_verse_number_only(self):
        """Verses with the same number are equal whatever their text."""
        a = Verse("2.47", translation="first")
        b = Verse("2.47", translation="second")
        c = Verse("2.48", translation="first")

        assert a == b
        assert hash(a) == hash(b)
        assert a != c
        assert len({a, b, c}) == 2

    def test_is_immutable(self):
        """Verse fields can't be reassigned."""
        verse = Verse("1.1")

        with pytest.raises(AttributeError):
            verse.verse_number = "1.2"

    def test_to_dict(self, sample_api_record):
        """to_dict uses entity field names."""
        data = Verse.from_api(sample_api_record).to_dict()

        assert set(data) == {
            "verse_number",
            "sanskrit_text",
            "transliteration",
            "word_meanings",
            "translation",
            "commentary",
        }
        assert data["verse_number"] == "2.47"


class TestGitaApiClientInit:
    """Tests for GitaApiClient construction."""

    def test_creates_with_api_key(self, api_key_env):
        """Creates successfully when API key is set."""
        client = GitaApiClient(BASE_URL, HOST)
        assert client.base_url == BASE_URL
        assert client.api_host == HOST
        assert client.timeout == 30

    def test_strips_trailing_slash(self, api_key_env):
        """Trailing slash is stripped from base URL."""
        client = GitaApiClient(BASE_URL + "/", HOST, timeout=5)
        assert client.base_url == BASE_URL
        assert client.timeout == 5

    def test_raises_without_api_key(self, monkeypatch):
        """Raises ValueError when GITA_RAPIDAPI_KEY is not set."""
        monkeypatch.delenv("GITA_RAPIDAPI_KEY", raising=False)

        with pytest.raises(ValueError, match="GITA_RAPIDAPI_KEY"):
            GitaApiClient(BASE_URL, HOST)


class TestFetchVerse:
    """Tests for GitaApiClient.fetch_verse."""

    @patch("gita_pro.services.gita_api.requests.get")
    def test_success(self, mock_get, client, sample_api_record):
        """Returns the first verse in the response object."""
        mock_get.return_value = mock_response({"2.47": sample_api_record})

        verse = client.fetch_verse(2, 47)

        assert verse.verse_number == "2.47"
        mock_get.assert_called_once_with(
            f"{BASE_URL}/2/47",
            headers={"x-rapidapi-host": HOST, "x-rapidapi-key": "test-api-key"},
            timeout=30,
        )

    @patch("gita_pro.services.gita_api.requests.get")
    def test_takes_first_value(self, mock_get, client, sample_api_record):
        """Only the first record in the object is used."""
        other = dict(sample_api_record, verseNumber="2.48")
        mock_get.return_value = mock_response({"a": sample_api_record, "b": other})

        assert client.fetch_verse(2, 47).verse_number == "2.47"

    @patch("gita_pro.services.gita_api.requests.get")
    def test_connection_error(self, mock_get, client):
        """Connection failures are network errors."""
        mock_get.side_effect = requests.exceptions.ConnectionError("Connection refused")

        with pytest.raises(VerseNetworkError, match="Cannot connect"):
            client.fetch_verse(1, 1)

    @patch("gita_pro.services.gita_api.requests.get")
    def test_timeout(self, mock_get, client):
        """Timeouts are network errors."""
        mock_get.side_effect = requests.exceptions.Timeout("read timed out")

        with pytest.raises(VerseNetworkError, match="timed out"):
            client.fetch_verse(1, 1)

    @patch("gita_pro.services.gita_api.requests.get")
    def test_server_error(self, mock_get, client):
        """5xx responses are network errors with the status code."""
        mock_get.return_value = mock_response("oops", status_code=503)

        with pytest.raises(VerseNetworkError) as exc_info:
            client.fetch_verse(1, 1)
        assert exc_info.value.status_code == 503

    @patch("gita_pro.services.gita_api.requests.get")
    def test_auth_failure(self, mock_get, client):
        """401 responses are network errors."""
        mock_get.return_value = mock_response({"message": "Invalid API key"}, status_code=401)

        with pytest.raises(VerseNetworkError, match="Authentication failed"):
            client.fetch_verse(1, 1)

    @patch("gita_pro.services.gita_api.requests.get")
    def test_not_found_is_decode_error(self, mock_get, client):
        """A verse index past the end of a chapter decodes as no verse."""
        mock_get.return_value = mock_response({"message": "Not found"}, status_code=404)

        with pytest.raises(VerseDecodeError) as exc_info:
            client.fetch_verse(1, 78)
        assert exc_info.value.status_code == 404

    @patch("gita_pro.services.gita_api.requests.get")
    def test_empty_body(self, mock_get, client):
        """An empty body is an empty response."""
        mock_get.return_value = mock_response(b"")

        with pytest.raises(EmptyResponseError):
            client.fetch_verse(1, 1)

    @patch("gita_pro.services.gita_api.requests.get")
    def test_empty_object(self, mock_get, client):
        """An object with no verses is an empty response."""
        mock_get.return_value = mock_response({})

        with pytest.raises(EmptyResponseError, match="No verse found"):
            client.fetch_verse(1, 1)

    @patch("gita_pro.services.gita_api.requests.get")
    def test_invalid_json(self, mock_get, client):
        """Malformed JSON is a decode error."""
        mock_get.return_value = mock_response("{not json")

        with pytest.raises(VerseDecodeError, match="Invalid JSON"):
            client.fetch_verse(1, 1)

    @patch("gita_pro.services.gita_api.requests.get")
    def test_non_object_payload(self, mock_get, client):
        """A JSON array is a decode error."""
        mock_get.return_value = mock_response([1, 2, 3])

        with pytest.raises(VerseDecodeError, match="Expected JSON object"):
            client.fetch_verse(1, 1)

    @patch("gita_pro.services.gita_api.requests.get")
    def test_errors_share_base_class(self, mock_get, client):
        """Every failure is a VerseFetchError."""
        mock_get.return_value = mock_response({"1.1": {"verseNumber": "1.1"}})

        with pytest.raises(VerseFetchError):
            client.fetch_verse(1, 1)
