"""
Locale helpers

Pure functions for language-tag handling:
- RTL (right-to-left) language detection
- Accept-Language header parsing with quality-value (q=) support
- Language metadata shaping
"""

from __future__ import annotations

from collections.abc import Iterable

# ── Constants ─────────────────────────────────────────────────────────────────

# Base language codes whose scripts read right-to-left
RTL_LOCALES: frozenset[str] = frozenset({"ar", "he", "fa", "ur", "yi", "ku"})


# ── Public helpers ────────────────────────────────────────────────────────────


def base_language(tag: str) -> str:
    """Return the lowercased two-letter base of a language tag ("fr-CA" → "fr")."""
    return tag.strip().split("-")[0].split("_")[0].lower()[:2]


def is_rtl_locale(locale: str) -> bool:
    """Return True when the given locale is right-to-left.

    Compares only the base language tag, so both "ar" and "ar-SA" are
    identified as RTL.
    """
    return base_language(locale) in RTL_LOCALES


def parse_language_preferences(header: str | None) -> list[str]:
    """Parse an Accept-Language header into base language codes, most preferred first.

    Algorithm:
    1. Split header into tags with optional q-values (default q=1.0).
    2. Drop tags with q=0 and the "*" wildcard.
    3. Sort by q-value descending (stable, so header order breaks ties).
    4. Reduce each tag to its two-letter base and drop duplicates.

    Args:
        header: Value of the Accept-Language HTTP header, e.g.
                "fr-CA,fr;q=0.9,en-US;q=0.8,en;q=0.7".

    Returns:
        Ordered list of two-letter codes, e.g. ["fr", "en"].
    """
    if not header:
        return []

    weighted: list[tuple[float, str]] = []
    for part in header.split(","):
        part = part.strip()
        if not part:
            continue
        tag, _, params = part.partition(";")
        q = 1.0
        params = params.strip()
        if params.startswith("q="):
            try:
                q = float(params[2:].strip())
            except ValueError:
                q = 1.0
        tag = tag.strip()
        if not tag or tag == "*" or q <= 0:
            continue
        weighted.append((q, tag))

    weighted.sort(key=lambda x: x[0], reverse=True)

    ordered: list[str] = []
    for _, tag in weighted:
        code = base_language(tag)
        if len(code) == 2 and code.isalpha() and code not in ordered:
            ordered.append(code)
    return ordered


def parse_accept_language(header: str, supported: Iterable[str]) -> str | None:
    """Return the most preferred language from the header that is in ``supported``."""
    supported_set = {s.lower() for s in supported}
    for code in parse_language_preferences(header):
        if code in supported_set:
            return code
    return None


def get_language_info(locale: str, name: str | None = None) -> dict[str, str | bool]:
    """Return a metadata dict describing the given locale.

    Returns:
        Dict with keys: ``code`` (str), ``name`` (str), ``is_rtl`` (bool).
        ``name`` falls back to the code itself when not given.
    """
    return {
        "code": locale,
        "name": name or locale,
        "is_rtl": is_rtl_locale(locale),
    }
