"""
File extension sets used to classify media URLs.

Extensions are based on the OpenSea metadata standards
(https://docs.opensea.io/docs/metadata-standards).
"""

from dataclasses import dataclass
from typing import FrozenSet, Iterable, Optional


@dataclass(frozen=True)
class MediaExtensions:
    """
    Immutable extension configuration shared by the adapters.

    Video and audio extensions count as exclusions from "image": a URL is a
    plain image only when it ends in none of the non-image extensions.
    """
    audio: FrozenSet[str] = frozenset({"mp3", "wav", "oga"})
    marketplace_video: FrozenSet[str] = frozenset(
        {"gltf", "glb", "webm", "mp4", "m4v", "ogv", "ogg", "mov"}
    )
    video: FrozenSet[str] = frozenset({"webm", "mp4", "ogv", "ogg", "mov"})
    three_d: FrozenSet[str] = frozenset({"gltf", "glb"})
    gif: FrozenSet[str] = frozenset({".gif"})

    @property
    def non_image(self) -> FrozenSet[str]:
        return self.marketplace_video | self.audio

    def is_gif(self, url: Optional[str]) -> bool:
        return ends_with_any(url, self.gif)

    def is_video(self, url: Optional[str]) -> bool:
        return ends_with_any(url, self.video)

    def is_three_d(self, url: Optional[str]) -> bool:
        return ends_with_any(url, self.three_d)

    def is_plain_image(self, url: Optional[str]) -> bool:
        return bool(url) and not ends_with_any(url, self.non_image)


DEFAULT_MEDIA_EXTENSIONS = MediaExtensions()


def ends_with_any(url: Optional[str], extensions: Iterable[str]) -> bool:
    """Case-insensitive suffix test of a URL against a set of extensions."""
    if not url:
        return False
    lowered = url.lower()
    return any(lowered.endswith(ext) for ext in extensions)


def first_matching(urls: Iterable[Optional[str]], predicate) -> Optional[str]:
    """First non-empty URL satisfying the predicate."""
    for url in urls:
        if url and predicate(url):
            return url
    return None


def first_present(urls: Iterable[Optional[str]]) -> Optional[str]:
    """First non-empty URL."""
    return first_matching(urls, lambda _url: True)
