# vibeboard/services/spotify_client.py
import logging
from typing import Dict, List, Optional

import requests

from vibeboard.models.spotify_models import (
    CurrentlyPlaying,
    Paginated,
    SavedTrack,
    SpotifyArtist,
    SpotifyPlaylist,
    SpotifyProfile,
    SpotifyTrack,
)

SPOTIFY_API_BASE = "https://api.spotify.com/v1"
DEFAULT_TIMEOUT = 10.0

logger = logging.getLogger(__name__)


class SpotifyAPIError(Exception):
    """Non-2xx answer from the Spotify Web API."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Spotify API error ({status_code}): {body}")


class SpotifyClient:
    """
    Thin wrapper around the Spotify Web API for one access token.

    The client never refreshes tokens: it is handed a token the session
    manager already validated.
    - 204 / 202 -> None (nothing playing)
    - other non-2xx -> SpotifyAPIError(status, body)
    """

    def __init__(self, access_token: str, http=None, timeout: float = DEFAULT_TIMEOUT,
                 base_url: str = SPOTIFY_API_BASE):
        self.access_token = access_token
        self.http = http or requests.Session()
        self.timeout = timeout
        self.base_url = base_url

    # --------- Spotify API Wrapper ---------
    def _spotify_get(self, path: str, params: Optional[Dict] = None) -> Optional[Dict]:
        url = f"{self.base_url}/{path}"
        headers = {"Authorization": f"Bearer {self.access_token}"}

        r = self.http.get(url, headers=headers, params=params, timeout=self.timeout)

        if r.status_code in (202, 204):
            return None

        if not 200 <= r.status_code < 300:
            logger.warning(f"Spotify GET /{path} failed with {r.status_code}")
            raise SpotifyAPIError(r.status_code, r.text)

        return r.json()

    def _get_page(self, path: str, params: Dict) -> Dict:
        data = self._spotify_get(path, params=params)
        if data is None:
            raise SpotifyAPIError(204, f"Empty response for paginated endpoint /{path}")
        return data

    # --------- Profile ---------
    def get_profile(self) -> SpotifyProfile:
        data = self._spotify_get("me")
        if data is None:
            raise SpotifyAPIError(204, "Empty profile response")
        return SpotifyProfile(**data)

    # --------- Top Items ---------
    def get_top_tracks(self, time_range: str = "medium_term", limit: int = 5) -> List[SpotifyTrack]:
        data = self._get_page("me/top/tracks", {"time_range": time_range, "limit": limit})
        return Paginated[SpotifyTrack](**data).items

    def get_top_artists(self, time_range: str = "medium_term", limit: int = 5) -> List[SpotifyArtist]:
        data = self._get_page("me/top/artists", {"time_range": time_range, "limit": limit})
        return Paginated[SpotifyArtist](**data).items

    # --------- Playback ---------
    def get_currently_playing(self) -> Optional[CurrentlyPlaying]:
        data = self._spotify_get("me/player/currently-playing")
        if data is None:
            return None
        return CurrentlyPlaying(**data)

    # --------- Library ---------
    def get_liked_songs_count(self) -> int:
        data = self._get_page("me/tracks", {"limit": 1})
        return Paginated[SavedTrack](**data).total

    def get_recently_liked_songs(self, limit: int = 10) -> List[SavedTrack]:
        data = self._get_page("me/tracks", {"limit": limit})
        return Paginated[SavedTrack](**data).items

    def get_user_playlists(self, limit: int = 50) -> Paginated[SpotifyPlaylist]:
        data = self._get_page("me/playlists", {"limit": limit})
        return Paginated[SpotifyPlaylist](**data)
