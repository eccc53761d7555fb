import re

from unidecode import unidecode

MAX_SLUG_LENGTH = 200


def slugify(text: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """URL slug from any script: "Café Brûlé" → "cafe-brule".

    Slugs never end in a hyphen, even after truncation.
    """
    text = unidecode(text or "").lower()
    text = re.sub(r"[^a-z0-9]+", "-", text).strip("-")
    return text[:max_length].rstrip("-")
