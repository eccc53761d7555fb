"""
Seed catalogue for the Locale Registry.

Written to the ``languages`` and ``regions`` tables by
``region_service.seed_locales()`` at deployment. Nothing else in the
codebase reads these lists directly; at runtime the registry loaded from
the database is the only source of supported regions and languages.
"""

# (code, display name) in canonical order
SEED_LANGUAGES: list[tuple[str, str]] = [
    ("en", "English"),
    ("fr", "Français"),
    ("es", "Español"),
    ("de", "Deutsch"),
    ("it", "Italiano"),
    ("pt", "Português"),
    ("sv", "Svenska"),
    ("fi", "Suomi"),
    ("da", "Dansk"),
    ("no", "Norsk"),
    ("nl", "Nederlands"),
]

SEED_REGIONS: list[dict] = [
    {"code": "US", "name": "United States", "languages": ["en"], "default_language": "en", "currency": "USD"},
    {"code": "GB", "name": "United Kingdom", "languages": ["en"], "default_language": "en", "currency": "GBP"},
    {"code": "CA", "name": "Canada", "languages": ["en", "fr"], "default_language": "en", "currency": "CAD"},
    {"code": "AU", "name": "Australia", "languages": ["en"], "default_language": "en", "currency": "AUD"},
    {"code": "FR", "name": "France", "languages": ["fr", "en"], "default_language": "fr", "currency": "EUR"},
    {"code": "DE", "name": "Germany", "languages": ["de", "en"], "default_language": "de", "currency": "EUR"},
    {"code": "ES", "name": "Spain", "languages": ["es", "en"], "default_language": "es", "currency": "EUR"},
    {"code": "IT", "name": "Italy", "languages": ["it", "en"], "default_language": "it", "currency": "EUR"},
    {"code": "PT", "name": "Portugal", "languages": ["pt", "en"], "default_language": "pt", "currency": "EUR"},
    {"code": "SE", "name": "Sweden", "languages": ["sv", "en"], "default_language": "sv", "currency": "SEK"},
    {"code": "NO", "name": "Norway", "languages": ["no", "en"], "default_language": "no", "currency": "NOK"},
    {"code": "DK", "name": "Denmark", "languages": ["da", "en"], "default_language": "da", "currency": "DKK"},
    {"code": "FI", "name": "Finland", "languages": ["fi", "sv", "en"], "default_language": "fi", "currency": "EUR"},
    {"code": "BE", "name": "Belgium", "languages": ["nl", "fr", "de", "en"], "default_language": "nl", "currency": "EUR"},
    {"code": "NL", "name": "Netherlands", "languages": ["nl", "en"], "default_language": "nl", "currency": "EUR"},
    {"code": "IE", "name": "Ireland", "languages": ["en"], "default_language": "en", "currency": "EUR"},
    {"code": "LU", "name": "Luxembourg", "languages": ["fr", "de", "en"], "default_language": "fr", "currency": "EUR"},
    {"code": "CH", "name": "Switzerland", "languages": ["de", "fr", "it", "en"], "default_language": "de", "currency": "CHF"},
    {"code": "AT", "name": "Austria", "languages": ["de", "en"], "default_language": "de", "currency": "EUR"},
]
