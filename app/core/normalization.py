import re
import unicodedata


def _strip_accents(value: str) -> str:
    normalized = unicodedata.normalize("NFKD", value or "")
    return "".join(ch for ch in normalized if not unicodedata.combining(ch))


def normalize_phone(value):
    """Phone as typed, without surrounding spaces; blank becomes None."""
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def normalize_email(value: str) -> str:
    return (value or "").strip().lower()


def normalize_curp(value: str) -> str:
    """CURP/clave de elector: alphanumeric, uppercase."""
    return re.sub(r"[^A-Za-z0-9]", "", (value or "").strip()).upper()


def normalize_person_name(value: str) -> str:
    """Collapse repeated spaces, keep accents as typed."""
    return re.sub(r"\s+", " ", (value or "").strip())


def name_search_key(value: str) -> str:
    """Accent and case insensitive key used to match colonia names."""
    return normalize_person_name(_strip_accents(value)).lower()
