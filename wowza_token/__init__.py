"""Wowza SecureToken generator and signing service."""

from wowza_token.signing import (
    HashAlgorithm,
    TokenSpec,
    verify_signed_url,
    TokenError,
    InvalidPrefix,
    InvalidSecret,
    InvalidIP,
    InvalidURL,
    UnknownAlgorithm,
    InvalidParams,
    InvalidPath,
    SecretNotSet,
)

__version__ = "0.1.0"

__all__ = [
    "HashAlgorithm",
    "TokenSpec",
    "verify_signed_url",
    "TokenError",
    "InvalidPrefix",
    "InvalidSecret",
    "InvalidIP",
    "InvalidURL",
    "UnknownAlgorithm",
    "InvalidParams",
    "InvalidPath",
    "SecretNotSet",
]
