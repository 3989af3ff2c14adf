import secrets
import string
import time

_BASE36 = string.digits + string.ascii_lowercase


def now_millis() -> int:
    return int(time.time() * 1000)


def random_suffix(n: int = 9) -> str:
    """n lowercase base36 characters."""
    return "".join(secrets.choice(_BASE36) for _ in range(n))


def local_product_id() -> str:
    """Id for listings that never reached the remote data service."""
    return f"local_{now_millis()}_{random_suffix()}"
