"""SecureToken request builder for Wowza playback URLs."""

import logging
import re
from collections.abc import Mapping
from urllib.parse import quote, urlsplit

from wowza_token.signing.algorithms import HashAlgorithm, digest, encode_token, get_algorithm
from wowza_token.signing.canonical import query_pairs, string_to_sign
from wowza_token.signing.errors import (
    InvalidIP,
    InvalidParams,
    InvalidPrefix,
    InvalidSecret,
    InvalidURL,
    SecretNotSet,
)

logger = logging.getLogger(__name__)

PREFIX_PATTERN = re.compile(r"^[\w\d%._~-]+$", re.ASCII)
SECRET_PATTERN = re.compile(r"^[\w\d]+$", re.ASCII)
IP_PATTERN = re.compile(r"^(?:[0-9]{1,3}\.){3}[0-9]{1,3}$")

# Characters encodeURIComponent leaves alone besides letters, digits and "_.-~"
URI_COMPONENT_SAFE = "!*'()"

# Characters a browser-style URL parser leaves unescaped in a path
PATH_SAFE = "/%:@!$&'()*+,;=~[]|^"

SINGLE_DOT_SEGMENTS = {".", "%2e"}
DOUBLE_DOT_SEGMENTS = {"..", ".%2e", "%2e.", "%2e%2e"}


def normalize_path(path: str) -> str:
    """
    Normalize a URL path the way the media server receives it.

    Dot segments are resolved and characters outside the URL path set
    (spaces, non-ASCII text, quotes) are percent-encoded, so
    ``/app/./x/../my stream`` becomes ``/app/my%20stream``.
    """
    segments = path.split("/")
    last = len(segments) - 1
    resolved = []
    for index, segment in enumerate(segments):
        lowered = segment.lower()
        if lowered in SINGLE_DOT_SEGMENTS or lowered in DOUBLE_DOT_SEGMENTS:
            # Keep the leading empty segment that anchors the root
            if lowered in DOUBLE_DOT_SEGMENTS and len(resolved) > 1:
                resolved.pop()
            if index == last:
                resolved.append("")
            continue
        resolved.append(segment)

    return quote("/".join(resolved), safe=PATH_SAFE)


def _param_value(value: str | int) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class TokenSpec:
    """
    Inputs for one SecureToken signed URL.

    Build one per playback request: set the URL and any optional fields,
    then call build_signed_url() (or compute_hash() for the bare token).
    """

    def __init__(self, prefix: str, shared_secret: str):
        """
        Args:
            prefix: Query parameter prefix configured on the media server
            shared_secret: SecureToken shared secret

        Raises:
            InvalidPrefix: Prefix contains characters unsafe in URLs
            InvalidSecret: Secret is not alphanumeric
        """
        if not isinstance(prefix, str) or not PREFIX_PATTERN.fullmatch(prefix):
            raise InvalidPrefix(f"Prefix [{prefix}] is invalid")
        if not isinstance(shared_secret, str) or not SECRET_PATTERN.fullmatch(shared_secret):
            raise InvalidSecret("Secret is invalid")

        self._prefix = prefix
        self._shared_secret = shared_secret
        self._client_ip: str | None = None
        self._url: str | None = None
        self._url_path: str | None = None
        self._hash_algorithm = HashAlgorithm.SHA256
        self._extra_params: dict[str, str] = {}

    def __repr__(self) -> str:
        return (
            f"TokenSpec(prefix={self._prefix!r}, url={self._url!r}, "
            f"client_ip={self._client_ip!r}, hash_algorithm={self._hash_algorithm.name})"
        )

    @property
    def prefix(self) -> str:
        return self._prefix

    @property
    def shared_secret(self) -> str:
        return self._shared_secret

    @property
    def client_ip(self) -> str | None:
        return self._client_ip

    @property
    def url(self) -> str | None:
        return self._url

    @property
    def url_path(self) -> str | None:
        return self._url_path

    @property
    def hash_algorithm(self) -> HashAlgorithm:
        return self._hash_algorithm

    @property
    def extra_params(self) -> dict[str, str]:
        return dict(self._extra_params)

    def set_client_ip(self, ip: str) -> None:
        """Bind the token to a single IPv4 client address."""
        if not isinstance(ip, str) or not IP_PATTERN.fullmatch(ip):
            raise InvalidIP(f"User IP ({ip}) is invalid")
        self._client_ip = ip

    def set_url(self, url: str) -> None:
        """
        Set the playback URL and derive the path that gets signed.

        Raises:
            InvalidURL: URL is not absolute or has no path
        """
        if not isinstance(url, str):
            raise InvalidURL("Invalid URL supplied")
        try:
            parsed = urlsplit(url)
        except ValueError as e:
            raise InvalidURL(f"Invalid URL supplied: {e}") from e

        if not parsed.scheme:
            raise InvalidURL("Invalid URL supplied: missing scheme")

        # An absolute URL with an empty path addresses the root
        path = parsed.path or ("/" if parsed.netloc else "")
        if not path:
            raise InvalidURL("Invalid URL supplied")
        path = normalize_path(path)

        self._url = url
        self._url_path = path
        logger.debug(f"SecureToken path set to {path}")

    def set_hash_algorithm(self, algorithm: HashAlgorithm | str | int) -> None:
        self._hash_algorithm = get_algorithm(algorithm)

    def set_extra_params(self, params: Mapping[str, object]) -> None:
        """
        Set extra query parameters to sign (e.g. starttime, endtime).

        Keys that do not contain the prefix get it prepended, so
        ``{"endtime": 1}`` becomes ``{"<prefix>endtime": "1"}``. Keys that
        already contain the prefix anywhere are kept as given. When both
        ``endtime`` and ``<prefix>endtime`` are passed, the rewritten
        ``endtime`` value wins. Booleans are written as ``true``/``false``.

        Raises:
            InvalidParams: params is not a mapping with string keys and
                string, integer or boolean values
        """
        if not isinstance(params, Mapping):
            raise InvalidParams("params must be a mapping")
        if not all(isinstance(key, str) for key in params):
            raise InvalidParams("params keys must be strings")
        for key, value in params.items():
            if not isinstance(value, (str, int)):
                raise InvalidParams(f"Value of param [{key}] must be a string, integer or boolean")

        # Already-prefixed keys keep their position, rewritten keys follow
        normalized = {key: _param_value(value) for key, value in params.items() if self._prefix in key}
        for key, value in params.items():
            if self._prefix not in key:
                normalized[self._prefix + key] = _param_value(value)

        self._extra_params = normalized

    def compute_hash(self) -> str:
        """
        Compute the SecureToken hash for the current inputs.

        Raises:
            SecretNotSet: No shared secret
            InvalidURL: set_url() has not been called
            InvalidPath: URL path lacks an application or stream
        """
        if not self._shared_secret:
            raise SecretNotSet("SharedSecret is not set")
        if self._url_path is None:
            raise InvalidURL("URL is not set")

        pairs = query_pairs(self._extra_params, self._client_ip, self._shared_secret)
        message = string_to_sign(self._url_path, pairs)
        return encode_token(digest(self._hash_algorithm, message.encode("utf-8")))

    def build_signed_url(self) -> str:
        """
        Build the playback URL with extra params and the hash appended.

        Returns:
            ``<url>?<encoded params>&<prefix>hash=<token>``
        """
        token = self.compute_hash()
        query = "&".join(
            f"{quote(key, safe=URI_COMPONENT_SAFE)}={quote(value, safe=URI_COMPONENT_SAFE)}"
            for key, value in self._extra_params.items()
        )
        return f"{self._url}?{query}&{self._prefix}hash={token}"
