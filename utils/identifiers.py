import secrets
import string
import time
from datetime import datetime, timezone

_ALPHABET = string.ascii_lowercase + string.digits


def generate_record_id(prefix: str) -> str:
    """``<prefix>_<epoch millis>_<9 random base36 chars>``, e.g. ``cart_1718000000000_k3j9x0a1b``."""
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(9))
    return f"{prefix}_{int(time.time() * 1000)}_{suffix}"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
