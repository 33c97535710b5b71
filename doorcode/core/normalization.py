"""Text normalization utilities for place names and user-entered addresses."""
import re
import unicodedata

# Abbreviations seen in Nigerian address text
NIGERIA_ABBREVIATIONS = {
    "fct": "federal capital territory",
    "ph city": "port harcourt",
    "rd": "road",
    "st": "street",
    "ave": "avenue",
    "cresc": "crescent",
    "opp": "opposite",
    "jn": "junction",
    "jnct": "junction",
    "lga": "local government area",
}

# Common alternate spellings
TRANSLITERATIONS = {
    "kaduna north lga": "kaduna north",
    "ibadan city": "ibadan",
    "abuja municipal area council": "abuja municipal",
    "amac": "abuja municipal",
}


def normalize_text(text: str) -> str:
    """
    Normalize text for matching: strip accents, lowercase, expand abbreviations,
    strip punctuation, collapse whitespace.

    Args:
        text: Input text string

    Returns:
        Normalized text string
    """
    if not text:
        return ""

    # Unicode normalization (Yoruba and Hausa diacritics)
    text = unicodedata.normalize("NFD", text)
    text = "".join(c for c in text if unicodedata.category(c) != "Mn")

    text = text.lower()

    # Remove punctuation before expanding so "St." and "Rd," match
    text = re.sub(r'[^\w\s]', ' ', text)
    text = re.sub(r'\s+', ' ', text).strip()

    for variant, canonical in TRANSLITERATIONS.items():
        text = re.sub(r'\b' + re.escape(variant) + r'\b', canonical, text)

    for abbrev, expansion in NIGERIA_ABBREVIATIONS.items():
        text = re.sub(r'\b' + re.escape(abbrev) + r'\b', expansion, text)

    return text
