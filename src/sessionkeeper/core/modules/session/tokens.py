import base64
import hashlib
import hmac
import secrets
import time

from sessionkeeper.core.modules.session.models import SessionToken

RANDOM_BYTES = 32


def generate_token(secret: str) -> SessionToken:
    """Generate an opaque session token.

    The secret keys an HMAC-SHA256 over the current timestamp and fresh random
    bytes; the digest is returned as standard padded base64.
    """
    message = str(time.time_ns()).encode("utf-8") + secrets.token_bytes(RANDOM_BYTES)
    digest = hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()
    return SessionToken(base64.b64encode(digest).decode("ascii"))
