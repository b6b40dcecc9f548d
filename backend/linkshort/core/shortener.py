import random
import string


# Digits, upper and lower case letters (Base62)
CHARSET = string.digits + string.ascii_uppercase + string.ascii_lowercase


def generate_short_code(length: int = 6) -> str:
    """
    Generate a random short code.

    Every character is an independent uniform draw from CHARSET, so the
    result always passes is_valid_code for lengths within the code bounds.
    Uniqueness is not guaranteed here; the link service checks the store.

    Note:
        - 6 chars: 62^6 = 56,800,235,584 combinations
    """
    return ''.join(random.choices(CHARSET, k=length))
