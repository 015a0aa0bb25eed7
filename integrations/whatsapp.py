"""WhatsApp click-to-chat links."""

import re
from urllib.parse import quote


def normalize_number(number) -> str:
    """Keep digits only; wa.me wants the international number without ``+``."""
    return re.sub(r'\D+', '', str(number or ''))


def build_whatsapp_link(number, text: str = '') -> str | None:
    """Return ``https://wa.me/<digits>?text=<message>`` or None without a number."""
    digits = normalize_number(number)
    if not digits:
        return None
    if not text:
        return f'https://wa.me/{digits}'
    return f'https://wa.me/{digits}?text={quote(text, safe="")}'
