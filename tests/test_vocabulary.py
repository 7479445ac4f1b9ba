import pytest

from journal_csv.vocabulary import (
    AdministrationMethod,
    MusicLinkProvider,
    TreatmentType,
    classify_music_url,
    normalize_music_url,
)


@pytest.mark.parametrize("enum", [TreatmentType, AdministrationMethod, MusicLinkProvider])
def test_every_member_has_a_unique_display_name(enum):
    names = [member.display_name for member in enum]
    assert all(names)
    assert len(set(names)) == len(names)


@pytest.mark.parametrize("enum", [TreatmentType, AdministrationMethod])
def test_display_name_lookup_round_trips(enum):
    for member in enum:
        assert enum.from_display_name(member.display_name) is member


def test_display_name_lookup_is_exact():
    assert TreatmentType.from_display_name("LSD") is TreatmentType.lsd
    assert TreatmentType.from_display_name("lsd") is None
    assert TreatmentType.from_display_name("Psilocybin ") is None
    assert AdministrationMethod.from_display_name("InvalidMethod") is None


def test_normalize_music_url():
    assert normalize_music_url("") is None
    assert normalize_music_url("open.spotify.com/track/abc") == "https://open.spotify.com/track/abc"
    assert normalize_music_url("https://example.com/music") == "https://example.com/music"
    assert normalize_music_url("spotify:track:abc") == "spotify:track:abc"
    assert normalize_music_url("example.com:8080/x") == "https://example.com:8080/x"


@pytest.mark.parametrize(
    "url, provider",
    [
        ("https://open.spotify.com/track/abc", MusicLinkProvider.spotify),
        ("https://youtube.com/watch?v=123", MusicLinkProvider.youtube),
        ("https://www.youtube.com/watch?v=123", MusicLinkProvider.youtube),
        ("https://youtu.be/123", MusicLinkProvider.youtube),
        ("https://soundcloud.com/artist/track", MusicLinkProvider.soundcloud),
        ("https://music.apple.com/us/album/123", MusicLinkProvider.apple_music),
        ("https://example.com/music", MusicLinkProvider.link_only),
        ("https://example.com/spotify", MusicLinkProvider.link_only),
        ("spotify:track:abc", MusicLinkProvider.spotify),
        ("http://[broken", MusicLinkProvider.link_only),
    ],
)
def test_classify_music_url(url, provider):
    assert classify_music_url(url) is provider
