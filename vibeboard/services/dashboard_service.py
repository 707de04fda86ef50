# vibeboard/services/dashboard_service.py
import logging
from concurrent.futures import ThreadPoolExecutor

import requests
from pydantic import ValidationError

from vibeboard.models.dashboard_models import DashboardResponse
from vibeboard.models.session_models import SessionUser
from vibeboard.models.spotify_models import Paginated, SpotifyPlaylist
from vibeboard.services.spotify_client import SpotifyAPIError, SpotifyClient
from vibeboard.services.vibe_service import compute_vibe

TOP_TRACKS_LIMIT = 5
TOP_ARTISTS_LIMIT = 50          # wide genre sample for the vibe
TOP_ARTISTS_SHOWN = 5
RECENTLY_LIKED_LIMIT = 10
PLAYLISTS_LIMIT = 50

logger = logging.getLogger(__name__)


def _fetch_or_default(name, fn, default):
    try:
        return fn()
    except (SpotifyAPIError, requests.RequestException, ValidationError) as e:
        logger.warning(f"Dashboard fetch '{name}' failed, using default: {e}")
        return default


def load_dashboard(client: SpotifyClient, user: SessionUser) -> DashboardResponse:
    """
    Fetch every dashboard section in parallel and join the results.
    A failed section degrades to its default; the rest of the page is kept.
    """
    fetches = {
        "top_tracks": (lambda: client.get_top_tracks(limit=TOP_TRACKS_LIMIT), []),
        "top_artists": (lambda: client.get_top_artists(limit=TOP_ARTISTS_LIMIT), []),
        "liked_songs_count": (client.get_liked_songs_count, 0),
        "recently_liked": (lambda: client.get_recently_liked_songs(limit=RECENTLY_LIKED_LIMIT), []),
        "playlists": (lambda: client.get_user_playlists(limit=PLAYLISTS_LIMIT), Paginated[SpotifyPlaylist]()),
        "now_playing": (client.get_currently_playing, None),
    }

    with ThreadPoolExecutor(max_workers=len(fetches)) as ex:
        futures = {
            name: ex.submit(_fetch_or_default, name, fn, default)
            for name, (fn, default) in fetches.items()
        }
        results = {name: fut.result() for name, fut in futures.items()}

    top_artists = results["top_artists"]
    playlists = results["playlists"]

    return DashboardResponse(
        user=user,
        top_tracks=results["top_tracks"],
        top_artists=top_artists[:TOP_ARTISTS_SHOWN],
        vibe=compute_vibe(top_artists),
        liked_songs_count=results["liked_songs_count"],
        recently_liked=results["recently_liked"],
        playlists=playlists.items,
        playlists_total=playlists.total,
        now_playing=results["now_playing"],
    )
