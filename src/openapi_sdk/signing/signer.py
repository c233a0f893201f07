"""
HMAC-SHA256 request signer

Computes the ``X-Api-Signature`` header value from the canonical request.
The server performs the same computation independently, so every byte of
the canonical request must match:

    METHOD|path|query|authorization:<token>\\nx-api-key:<key>\\nx-timestamp:<ts>\\n|<signed headers>|<sha1(body)>

The canonical request is hashed with SHA-1, prefixed with the algorithm
name and signed with HMAC-SHA256 keyed by the app secret.
"""

from cryptography.hazmat.primitives import hashes, hmac

from .types import SignatureParams, HttpMethod
from .utils import sha1_hex, split_url, to_hex

SIGNATURE_ALGORITHM = "HMAC-SHA256"
SIGNED_HEADERS = "authorization;x-api-key;x-timestamp"


def build_canonical_request(params: SignatureParams) -> str:
    """
    Build the canonical request string covered by the signature.

    Args:
        params: Signed request attributes

    Returns:
        str: Canonical request
    """
    method = params.method.value if isinstance(params.method, HttpMethod) else str(params.method)
    path, query = split_url(params.url)

    canonical = f"{method.upper()}|{path}|{query}|"
    canonical += f"authorization:{params.access_token}\n"
    canonical += f"x-api-key:{params.app_key}\n"
    canonical += f"x-timestamp:{params.timestamp}\n"
    canonical += f"|{SIGNED_HEADERS}|"

    if params.body:
        canonical += sha1_hex(params.body)

    return canonical


def signature(params: SignatureParams) -> str:
    """
    Sign a request.

    Args:
        params: Signed request attributes

    Returns:
        str: Value for the X-Api-Signature header
    """
    canonical = build_canonical_request(params)
    string_to_sign = f"{SIGNATURE_ALGORITHM}|{sha1_hex(canonical.encode('utf-8'))}"

    mac = hmac.HMAC(params.app_secret.encode('utf-8'), hashes.SHA256())
    mac.update(string_to_sign.encode('utf-8'))
    sign = to_hex(mac.finalize())

    return f"{SIGNATURE_ALGORITHM} SignedHeaders={SIGNED_HEADERS}, Signature={sign}"
