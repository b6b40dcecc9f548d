import string
from urllib.parse import urlparse

from ..config import settings


CODE_CHARSET = frozenset(string.ascii_letters + string.digits)
ALLOWED_SCHEMES = ("http", "https")
MAX_URL_LENGTH = 2048


def is_valid_code(code, min_length: int = None, max_length: int = None) -> bool:
    """
    Check that a short code is safe to mount as a single path segment.

    Args:
        code: Candidate code
        min_length: Minimum length (defaults to settings.CODE_MIN_LENGTH)
        max_length: Maximum length (defaults to settings.CODE_MAX_LENGTH)

    Returns:
        True if the code is non-empty, within bounds and alphanumeric
    """
    if not isinstance(code, str) or not code:
        return False

    if min_length is None:
        min_length = settings.CODE_MIN_LENGTH
    if max_length is None:
        max_length = settings.CODE_MAX_LENGTH

    if not min_length <= len(code) <= max_length:
        return False

    return all(c in CODE_CHARSET for c in code)


def is_valid_url(url) -> bool:
    """
    Check that a URL is absolute and uses http or https.

    Relative URLs, other schemes (javascript:, data:, ftp:) and strings
    that fail to parse are rejected.
    """
    if not isinstance(url, str) or not url:
        return False

    if len(url) > MAX_URL_LENGTH:
        return False

    # Whitespace and control characters never belong in a destination
    if any(c.isspace() or ord(c) < 32 for c in url):
        return False

    try:
        result = urlparse(url)
        hostname = result.hostname
    except ValueError:
        return False

    return result.scheme.lower() in ALLOWED_SCHEMES and bool(hostname)
