"""Errors raised while building or hashing a SecureToken request."""


class TokenError(ValueError):
    """Base class for all SecureToken validation failures."""


class InvalidPrefix(TokenError):
    pass


class InvalidSecret(TokenError):
    pass


class InvalidIP(TokenError):
    pass


class InvalidURL(TokenError):
    pass


class UnknownAlgorithm(TokenError):
    pass


class InvalidParams(TokenError):
    pass


class InvalidPath(TokenError):
    """URL path does not name both an application and a stream."""


class SecretNotSet(TokenError):
    pass
