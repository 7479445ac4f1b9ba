"""
Domain vocabulary shared by the encoder and the decoder.

Each enum owns a single display-name table. The display name is what goes on
the wire, so both directions read from the same table and cannot drift.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Dict, Optional
from urllib.parse import urlsplit


class _DisplayNamed(str, Enum):
    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[type(self)][self]

    @classmethod
    def from_display_name(cls, name: str):
        """Exact, case-sensitive lookup. Returns None for unknown names."""
        for member, display in _DISPLAY_NAMES[cls].items():
            if display == name:
                return member
        return None


class TreatmentType(_DisplayNamed):
    psilocybin = "psilocybin"
    lsd = "lsd"
    mdma = "mdma"
    ketamine = "ketamine"
    dmt = "dmt"
    ayahuasca = "ayahuasca"
    mescaline = "mescaline"
    cannabis = "cannabis"
    other = "other"


class AdministrationMethod(_DisplayNamed):
    oral = "oral"
    sublingual = "sublingual"
    nasal = "nasal"
    intramuscular = "intramuscular"
    intravenous = "intravenous"
    inhaled = "inhaled"
    other = "other"


class MusicLinkProvider(_DisplayNamed):
    spotify = "spotify"
    youtube = "youtube"
    soundcloud = "soundcloud"
    apple_music = "apple_music"
    link_only = "link_only"


_DISPLAY_NAMES: Dict[type, Dict[Enum, str]] = {
    TreatmentType: {
        TreatmentType.psilocybin: "Psilocybin",
        TreatmentType.lsd: "LSD",
        TreatmentType.mdma: "MDMA",
        TreatmentType.ketamine: "Ketamine",
        TreatmentType.dmt: "DMT",
        TreatmentType.ayahuasca: "Ayahuasca",
        TreatmentType.mescaline: "Mescaline",
        TreatmentType.cannabis: "Cannabis",
        TreatmentType.other: "Other",
    },
    AdministrationMethod: {
        AdministrationMethod.oral: "Oral",
        AdministrationMethod.sublingual: "Sublingual",
        AdministrationMethod.nasal: "Nasal",
        AdministrationMethod.intramuscular: "Intramuscular",
        AdministrationMethod.intravenous: "Intravenous",
        AdministrationMethod.inhaled: "Inhaled",
        AdministrationMethod.other: "Other",
    },
    MusicLinkProvider: {
        MusicLinkProvider.spotify: "Spotify",
        MusicLinkProvider.youtube: "YouTube",
        MusicLinkProvider.soundcloud: "SoundCloud",
        MusicLinkProvider.apple_music: "Apple Music",
        MusicLinkProvider.link_only: "Link",
    },
}

# "host:443/path" is a port, not a scheme.
_SCHEME = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*:(?!\d)")

# Checked in order against the lowercased host.
_PROVIDER_HOSTS = (
    ("spotify", MusicLinkProvider.spotify),
    ("youtube", MusicLinkProvider.youtube),
    ("youtu.be", MusicLinkProvider.youtube),
    ("soundcloud", MusicLinkProvider.soundcloud),
    ("music.apple.com", MusicLinkProvider.apple_music),
)


def normalize_music_url(raw: str) -> Optional[str]:
    """Give a bare link an https scheme. Empty input means no link."""
    if not raw:
        return None
    if not _SCHEME.match(raw):
        return "https://" + raw
    return raw


def classify_music_url(url: str) -> MusicLinkProvider:
    try:
        parts = urlsplit(url)
        host = (parts.hostname or parts.scheme or "").lower()
    except ValueError:
        return MusicLinkProvider.link_only
    for needle, provider in _PROVIDER_HOSTS:
        if needle in host:
            return provider
    return MusicLinkProvider.link_only
