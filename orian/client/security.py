"""Input validation, sanitization and identifier generation."""

import html
import re
import secrets
import string
import time

from orian.models.schemas import MAX_MESSAGE_LENGTH

# Tab, LF and CR are kept
_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

BLOCKED_PATTERNS = (
    re.compile(r"<script", re.IGNORECASE),
    re.compile(r"javascript:", re.IGNORECASE),
    re.compile(r"data:text/html", re.IGNORECASE),
    re.compile(r"vbscript:", re.IGNORECASE),
)

_BASE36 = string.digits + string.ascii_lowercase


def _to_base36(value: int) -> str:
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def validate_input(text: object) -> bool:
    """Check that text is a non-blank, bounded, non-suspicious string.

    Text made only of control characters and whitespace counts as blank.
    """
    if not text or not isinstance(text, str):
        return False
    stripped = text.strip()
    if not stripped or len(stripped) > MAX_MESSAGE_LENGTH:
        return False
    if not _CONTROL_CHARS.sub("", stripped).strip():
        return False
    return not any(pattern.search(text) for pattern in BLOCKED_PATTERNS)


def sanitize_input(text: object) -> str:
    """Strip control characters, trim and truncate user input.

    Trailing whitespace exposed by truncation is trimmed too, so the result
    is stable under repeated sanitization.

    Args:
        text: Raw user input.

    Returns:
        Sanitized text of at most MAX_MESSAGE_LENGTH characters.
    """
    if not isinstance(text, str):
        return ""
    cleaned = _CONTROL_CHARS.sub("", text).strip()
    return cleaned[:MAX_MESSAGE_LENGTH].rstrip()


def escape_html(text: str) -> str:
    """Escape text for HTML display, keeping line breaks."""
    return html.escape(text, quote=True).replace("\n", "<br>")


def generate_client_id() -> str:
    """Generate a ``client_<time36>_<random>`` identifier."""
    timestamp = _to_base36(int(time.time() * 1000))
    random_part = "".join(_to_base36(byte) for byte in secrets.token_bytes(16))
    return f"client_{timestamp}_{random_part}"


def generate_conversation_id() -> str:
    """Generate a ``conv_<ms>_<9 random base36 chars>`` identifier."""
    suffix = "".join(secrets.choice(_BASE36) for _ in range(9))
    return f"conv_{int(time.time() * 1000)}_{suffix}"
