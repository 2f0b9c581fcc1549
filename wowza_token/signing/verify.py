"""Server-side check of SecureToken signed URLs."""

import hmac
import logging
from urllib.parse import parse_qsl, urlsplit, urlunsplit

from wowza_token.signing.algorithms import HashAlgorithm
from wowza_token.signing.spec import TokenSpec

logger = logging.getLogger(__name__)


def verify_signed_url(
    signed_url: str,
    prefix: str,
    shared_secret: str,
    client_ip: str | None = None,
    hash_algorithm: HashAlgorithm | str | int = HashAlgorithm.SHA256,
) -> tuple[bool, str | None]:
    """
    Recompute the hash of a signed URL and compare it to the one it carries.

    Query parameters containing the prefix are treated as signed extra
    params, the same way the media server selects them.

    Args:
        signed_url: URL produced by TokenSpec.build_signed_url()
        prefix: Query parameter prefix
        shared_secret: SecureToken shared secret
        client_ip: Address of the requesting client, if tokens are IP-bound
        hash_algorithm: Algorithm the token was generated with

    Returns:
        Tuple of (is_valid, error_message)

    Raises:
        TokenError: Any of the inputs is malformed
    """
    spec = TokenSpec(prefix, shared_secret)
    spec.set_hash_algorithm(hash_algorithm)
    if client_ip is not None:
        spec.set_client_ip(client_ip)

    parsed = urlsplit(signed_url)
    hash_key = f"{prefix}hash"

    token = None
    params = {}
    # A base URL that already had a query gets a second "?" before the signed params
    query = parsed.query.replace("?", "&")
    for key, value in parse_qsl(query, keep_blank_values=True):
        if key == hash_key:
            token = value
        elif prefix in key:
            params[key] = value

    if not token:
        return False, "Missing token"

    spec.set_url(urlunsplit((parsed.scheme, parsed.netloc, parsed.path, "", "")))
    spec.set_extra_params(params)
    expected = spec.compute_hash()

    if not hmac.compare_digest(token.encode("utf-8"), expected.encode("ascii")):
        logger.debug(f"SecureToken mismatch for {parsed.path}")
        return False, "Invalid token"

    return True, None
