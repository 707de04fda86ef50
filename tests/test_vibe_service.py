import pytest

from vibeboard.models.spotify_models import SpotifyArtist
from vibeboard.services.vibe_service import (
    GENRE_VIBE_TABLE,
    NEUTRAL_VIBE,
    VIBE_AXES,
    compute_vibe,
    compute_vibe_from_genres,
    match_genre,
)


def artist(*genres):
    return SpotifyArtist(name="artist", genres=list(genres))


def mean_of(*keywords):
    return {
        axis: sum(getattr(GENRE_VIBE_TABLE[k], axis) for k in keywords) / len(keywords)
        for axis in VIBE_AXES
    }


def test_empty_input_is_neutral():
    assert compute_vibe([]) == NEUTRAL_VIBE
    assert compute_vibe([artist(), artist()]) == NEUTRAL_VIBE


def test_unmapped_genre_is_neutral():
    assert compute_vibe_from_genres(["Some Obscure Unmapped Genre"]) == NEUTRAL_VIBE


def test_neutral_is_half_on_every_axis():
    for axis in VIBE_AXES:
        assert getattr(NEUTRAL_VIBE, axis) == 0.5


def test_table_order_decides_precedence():
    # "pop" is declared before "k-pop", so k-pop resolves to pop
    assert match_genre("k-pop") == "pop"
    assert match_genre("electro-pop") == "pop"
    assert match_genre("dance pop") == "dance"
    assert match_genre("trap latino") == "rap"
    assert match_genre("alt rock") == "rock"
    assert match_genre("Deep House") == "house"
    assert match_genre("vaporwave") is None


def test_single_genre_contributes_once():
    vibe = compute_vibe_from_genres(["k-pop"])
    assert vibe == GENRE_VIBE_TABLE["pop"]


def test_matching_is_case_insensitive():
    assert compute_vibe_from_genres(["MODERN JAZZ"]) == GENRE_VIBE_TABLE["jazz"]


def test_house_and_jazz_weighted_two_to_one():
    vibe = compute_vibe([artist("deep house", "french house"), artist("modern jazz")])
    expected = mean_of("house", "house", "jazz")
    for axis in VIBE_AXES:
        assert getattr(vibe, axis) == pytest.approx(expected[axis])


def test_unmatched_genres_do_not_dilute_the_mean():
    vibe = compute_vibe_from_genres(["classical", "vaporwave", "witch house", "zzz"])
    expected = mean_of("classical", "house")
    for axis in VIBE_AXES:
        assert getattr(vibe, axis) == pytest.approx(expected[axis])


def test_accepts_raw_artist_dicts():
    vibe = compute_vibe([{"name": "a", "genres": ["metal"]}, {"name": "b"}])
    assert vibe == GENRE_VIBE_TABLE["metal"]


def test_deterministic_for_same_input():
    genres = ["indie folk", "k-pop", "uk drill", "bossa nova", "synthwave", "chamber pop"]
    first = compute_vibe_from_genres(genres)
    for _ in range(5):
        assert compute_vibe_from_genres(list(genres)) == first


def test_every_axis_stays_in_unit_range():
    vibe = compute_vibe_from_genres(list(GENRE_VIBE_TABLE))
    for axis in VIBE_AXES:
        assert 0.0 <= getattr(vibe, axis) <= 1.0
