from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from vibeboard.models.session_models import SessionUser
from vibeboard.models.spotify_models import (
    CurrentlyPlaying,
    SavedTrack,
    SpotifyArtist,
    SpotifyPlaylist,
    SpotifyTrack,
)


# ======================================================
# Genre Vibe Vector
# ======================================================

class VibeVector(BaseModel):
    model_config = ConfigDict(frozen=True)

    energy: float = Field(ge=0.0, le=1.0)
    danceability: float = Field(ge=0.0, le=1.0)
    valence: float = Field(ge=0.0, le=1.0)
    acousticness: float = Field(ge=0.0, le=1.0)
    instrumentalness: float = Field(ge=0.0, le=1.0)


# ======================================================
# Dashboard payload
# ======================================================

class DashboardResponse(BaseModel):
    user: SessionUser
    top_tracks: List[SpotifyTrack]
    top_artists: List[SpotifyArtist]
    vibe: VibeVector
    liked_songs_count: int
    recently_liked: List[SavedTrack]
    playlists: List[SpotifyPlaylist]
    playlists_total: int
    now_playing: Optional[CurrentlyPlaying] = None


class StatusResponse(BaseModel):
    status: str
    message: str
