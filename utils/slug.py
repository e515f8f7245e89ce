import re
import unicodedata

MAX_SLUG_LENGTH = 64
_NON_SLUG_CHARS = re.compile(r"[^a-z0-9]+")


def normalize_slug(value: str) -> str:
    """``"Légends  Restaurant!"`` -> ``"legends-restaurant"``.

    Caracteres sem equivalente ASCII (nomes em árabe/curdo) são descartados;
    o resultado pode ser vazio.
    """
    if not value:
        return ""

    ascii_value = unicodedata.normalize("NFKD", value).encode("ascii", "ignore").decode("ascii")
    slug = _NON_SLUG_CHARS.sub("-", ascii_value.lower()).strip("-")
    return slug[:MAX_SLUG_LENGTH].rstrip("-")
