"""Wowza SecureToken signing utilities."""

from wowza_token.signing.algorithms import HashAlgorithm, get_algorithm
from wowza_token.signing.errors import (
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
from wowza_token.signing.spec import TokenSpec
from wowza_token.signing.verify import verify_signed_url

__all__ = [
    "HashAlgorithm",
    "get_algorithm",
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
