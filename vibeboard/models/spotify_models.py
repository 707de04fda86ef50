from typing import Generic, List, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class SpotifyImage(BaseModel):
    url: str
    height: Optional[int] = None
    width: Optional[int] = None


class SpotifyArtist(BaseModel):
    id: Optional[str] = None
    name: str
    images: List[SpotifyImage] = []
    genres: List[str] = []
    external_urls: dict = {}


class SpotifyAlbum(BaseModel):
    id: Optional[str] = None
    name: str
    images: List[SpotifyImage] = []


class SpotifyTrack(BaseModel):
    id: Optional[str] = None        # local files have no id
    name: str
    artists: List[SpotifyArtist] = []
    album: Optional[SpotifyAlbum] = None
    duration_ms: int = 0
    preview_url: Optional[str] = None
    external_urls: dict = {}


class SavedTrack(BaseModel):
    added_at: str
    track: SpotifyTrack


class PlaylistOwner(BaseModel):
    display_name: Optional[str] = None


class PlaylistTracksRef(BaseModel):
    total: int = 0


class SpotifyPlaylist(BaseModel):
    id: str
    name: str
    images: Optional[List[SpotifyImage]] = None
    tracks: PlaylistTracksRef = PlaylistTracksRef()
    external_urls: dict = {}
    description: Optional[str] = None
    owner: PlaylistOwner = PlaylistOwner()


class CurrentlyPlaying(BaseModel):
    is_playing: bool = False
    progress_ms: Optional[int] = None
    item: Optional[SpotifyTrack] = None     # null during ads
    currently_playing_type: str = "track"


class SpotifyProfile(BaseModel):
    id: str
    display_name: Optional[str] = None
    email: Optional[str] = None


# Spotify paging object, passed through as-is (next is never followed)
class Paginated(BaseModel, Generic[T]):
    items: List[T] = []
    total: int = 0
    limit: int = 0
    offset: int = 0
    next: Optional[str] = None
