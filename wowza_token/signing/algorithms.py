"""Hash algorithms supported by Wowza SecureToken."""

import base64
import hashlib
from enum import Enum
from typing import Any, Callable

from wowza_token.signing.errors import UnknownAlgorithm


class HashAlgorithm(str, Enum):
    """SHA-2 variants accepted by the media server."""
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"


# Every HashAlgorithm member must have an entry here
DIGESTS: dict[HashAlgorithm, Callable[[bytes], Any]] = {
    HashAlgorithm.SHA256: hashlib.sha256,
    HashAlgorithm.SHA384: hashlib.sha384,
    HashAlgorithm.SHA512: hashlib.sha512,
}

# Numeric ids used by the Wowza reference token generators
LEGACY_IDS = {
    1: HashAlgorithm.SHA256,
    2: HashAlgorithm.SHA384,
    3: HashAlgorithm.SHA512,
}


def get_algorithm(value: HashAlgorithm | str | int) -> HashAlgorithm:
    """
    Resolve an algorithm identifier.

    Accepts a HashAlgorithm member, its name ("SHA256", any case), its
    hashlib name ("sha256") or a legacy numeric id (1, 2, 3).
    """
    if isinstance(value, HashAlgorithm):
        return value

    if isinstance(value, int) and not isinstance(value, bool):
        if value in LEGACY_IDS:
            return LEGACY_IDS[value]
    elif isinstance(value, str):
        name = value.strip().upper()
        if name in HashAlgorithm.__members__:
            return HashAlgorithm[name]

    available = ", ".join(alg.name for alg in HashAlgorithm)
    raise UnknownAlgorithm(f"Algorithm [{value}] not defined. Available: {available}")


def digest(algorithm: HashAlgorithm, message: bytes) -> bytes:
    """Return the raw digest of message."""
    return DIGESTS[algorithm](message).digest()


def encode_token(raw: bytes) -> str:
    """
    Encode a digest with standard base64, then swap in URL-safe characters.

    Padding is kept: the server compares the token byte-for-byte.
    """
    encoded = base64.b64encode(raw).decode("ascii")
    return encoded.replace("+", "-").replace("/", "_")
