# vibeboard/services/vibe_service.py
"""
Genre-based vibe profile.

Spotify's per-track audio-features endpoint is no longer available to new
apps, so the five radar axes are estimated from artist genre tags instead:
every genre string is matched against a fixed keyword table and the matched
reference vectors are averaged.
"""
from types import MappingProxyType
from typing import Iterable, List

from vibeboard.models.dashboard_models import VibeVector

VIBE_AXES = ("energy", "danceability", "valence", "acousticness", "instrumentalness")

NEUTRAL_VIBE = VibeVector(
    energy=0.5,
    danceability=0.5,
    valence=0.5,
    acousticness=0.5,
    instrumentalness=0.5,
)


def _vibe(energy, danceability, valence, acousticness, instrumentalness) -> VibeVector:
    return VibeVector(
        energy=energy,
        danceability=danceability,
        valence=valence,
        acousticness=acousticness,
        instrumentalness=instrumentalness,
    )


# Order is precedence: the first keyword contained in a genre wins
GENRE_VIBE_TABLE = MappingProxyType({
    "electronic":    _vibe(0.8, 0.8, 0.6, 0.1, 0.4),
    "edm":           _vibe(0.9, 0.9, 0.7, 0.05, 0.5),
    "house":         _vibe(0.8, 0.9, 0.7, 0.1, 0.5),
    "techno":        _vibe(0.85, 0.8, 0.5, 0.05, 0.7),
    "trance":        _vibe(0.8, 0.7, 0.6, 0.05, 0.6),
    "drum and bass": _vibe(0.9, 0.8, 0.5, 0.05, 0.5),
    "dubstep":       _vibe(0.9, 0.7, 0.4, 0.05, 0.4),
    "dance":         _vibe(0.8, 0.9, 0.7, 0.1, 0.3),
    "pop":           _vibe(0.7, 0.7, 0.7, 0.3, 0.1),
    "k-pop":         _vibe(0.75, 0.8, 0.7, 0.2, 0.1),
    "rock":          _vibe(0.8, 0.5, 0.5, 0.3, 0.2),
    "alt rock":      _vibe(0.7, 0.5, 0.45, 0.35, 0.25),
    "metal":         _vibe(0.95, 0.35, 0.3, 0.05, 0.3),
    "hip hop":       _vibe(0.7, 0.8, 0.6, 0.1, 0.1),
    "rap":           _vibe(0.7, 0.8, 0.5, 0.1, 0.05),
    "trap":          _vibe(0.75, 0.85, 0.45, 0.05, 0.1),
    "r&b":           _vibe(0.5, 0.7, 0.6, 0.3, 0.1),
    "soul":          _vibe(0.5, 0.6, 0.6, 0.5, 0.1),
    "funk":          _vibe(0.7, 0.8, 0.7, 0.3, 0.2),
    "jazz":          _vibe(0.4, 0.5, 0.5, 0.7, 0.5),
    "classical":     _vibe(0.3, 0.2, 0.4, 0.9, 0.9),
    "acoustic":      _vibe(0.3, 0.4, 0.5, 0.9, 0.2),
    "folk":          _vibe(0.4, 0.4, 0.5, 0.8, 0.2),
    "country":       _vibe(0.55, 0.55, 0.65, 0.55, 0.1),
    "indie":         _vibe(0.55, 0.5, 0.5, 0.5, 0.3),
    "ambient":       _vibe(0.2, 0.2, 0.4, 0.6, 0.85),
    "punk":          _vibe(0.9, 0.5, 0.5, 0.1, 0.1),
    "reggae":        _vibe(0.5, 0.7, 0.7, 0.4, 0.2),
    "reggaeton":     _vibe(0.75, 0.9, 0.7, 0.15, 0.1),
    "latin":         _vibe(0.7, 0.8, 0.7, 0.3, 0.1),
    "blues":         _vibe(0.5, 0.4, 0.4, 0.6, 0.2),
    "gospel":        _vibe(0.6, 0.5, 0.7, 0.5, 0.1),
    "lofi":          _vibe(0.3, 0.5, 0.5, 0.4, 0.7),
    "synthwave":     _vibe(0.7, 0.7, 0.6, 0.05, 0.6),
    "grunge":        _vibe(0.8, 0.4, 0.3, 0.2, 0.2),
    "emo":           _vibe(0.7, 0.45, 0.3, 0.25, 0.15),
    "ska":           _vibe(0.8, 0.8, 0.7, 0.2, 0.15),
    "disco":         _vibe(0.8, 0.9, 0.8, 0.15, 0.2),
})


def match_genre(genre: str):
    """Return the first table keyword contained in genre, or None."""
    lower = genre.lower()
    for keyword in GENRE_VIBE_TABLE:
        if keyword in lower:
            return keyword
    return None


def compute_vibe_from_genres(genres: Iterable[str]) -> VibeVector:
    genres = list(genres)
    if not genres:
        return NEUTRAL_VIBE

    sums = {axis: 0.0 for axis in VIBE_AXES}
    match_count = 0

    for genre in genres:
        keyword = match_genre(genre)
        if keyword is None:
            continue

        reference = GENRE_VIBE_TABLE[keyword]
        for axis in VIBE_AXES:
            sums[axis] += getattr(reference, axis)
        match_count += 1

    if match_count == 0:
        return NEUTRAL_VIBE

    return VibeVector(**{axis: sums[axis] / match_count for axis in VIBE_AXES})


def _artist_genres(artist) -> List[str]:
    if isinstance(artist, dict):
        return artist.get("genres") or []
    return artist.genres


def compute_vibe(artists: Iterable) -> VibeVector:
    """Vibe profile of a list of artists (models or raw Spotify dicts)."""
    genres = [genre for artist in artists for genre in _artist_genres(artist)]
    return compute_vibe_from_genres(genres)
