import secrets
import string
import time


_BASE36_ALPHABET = string.digits + string.ascii_uppercase


def _to_base36(value: int) -> str:
    if value == 0:
        return '0'
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return ''.join(reversed(digits))


def generate_invitation_code(*, prefix: str = 'INV', suffix_length: int = 4) -> str:
    """
    Build a human-friendly invitation code such as ``INV-MB3K9Q2A-7XQ4``.

    The base36 millisecond timestamp keeps codes roughly sortable; the random
    suffix separates registrations created in the same millisecond. The store
    holds a unique index on the column as the final guard.
    """
    timestamp = _to_base36(time.time_ns() // 1_000_000)
    suffix = ''.join(secrets.choice(_BASE36_ALPHABET) for _ in range(suffix_length))
    return f'{prefix}-{timestamp}-{suffix}'
