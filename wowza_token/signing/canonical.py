"""Canonical string assembly for SecureToken hashing.

The string to sign is ``<canonical path>?<canonical query>``. Both halves are
built here as pure functions so the media server's exact rules can be tested
on their own.
"""

from collections.abc import Iterable, Mapping

from wowza_token.signing.errors import InvalidPath

# Segments containing this marker (and everything after them) are not signed
MANIFEST_MARKER = "m3u8"


def canonical_path(url_path: str) -> str:
    """
    Reduce a URL path to the part the media server signs.

    The leading slash is dropped and the path is cut before the first segment
    containing "m3u8", so ``/live/stream/playlist.m3u8`` becomes
    ``live/stream``.

    Raises:
        InvalidPath: The path has fewer than two segments
    """
    if url_path.startswith("/"):
        url_path = url_path[1:]

    segments = url_path.split("/")
    if len(segments) < 2:
        raise InvalidPath("Application or stream is invalid")

    kept = []
    for segment in segments:
        if MANIFEST_MARKER in segment:
            return "/".join(kept)
        kept.append(segment)

    # Trailing slash in the request path
    path = "/".join(kept)
    if path.endswith("/"):
        path = path[:-1]
    return path


def query_pairs(
    extra_params: Mapping[str, str],
    client_ip: str | None,
    shared_secret: str,
) -> dict[str, str]:
    """Merge extra params with the bare client IP and secret keys."""
    pairs = dict(extra_params)
    if client_ip is not None:
        pairs[client_ip] = ""
    pairs[shared_secret] = ""
    return pairs


def canonical_query(pairs: Mapping[str, str | None] | Iterable[tuple[str, str | None]]) -> str:
    """
    Join pairs sorted by key as ``key`` or ``key=value``.

    Values are inserted verbatim, no percent-encoding.
    """
    items = pairs.items() if isinstance(pairs, Mapping) else pairs
    parts = []
    for key, value in sorted(items, key=lambda item: item[0]):
        parts.append(f"{key}={value}" if value else key)
    return "&".join(parts)


def string_to_sign(url_path: str, pairs: Mapping[str, str]) -> str:
    return f"{canonical_path(url_path)}?{canonical_query(pairs)}"
