import pytest

from helpers import make_entry


@pytest.fixture
def entry():
    return make_entry(music_link_url="https://open.spotify.com/playlist/abc123")
