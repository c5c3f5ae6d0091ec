import re

# pg_trgm treats any run of alphanumerics as a word
_WORD_RE = re.compile(r"[^\W_]+", re.UNICODE)


def clean_name(name: str) -> str:
    """Display form of a tag/equipment name: surrounding whitespace removed, case kept."""
    return (name or "").strip()


def normalize_name(name: str) -> str:
    """Lookup key for a tag/equipment name."""
    return clean_name(name).lower()


def trigrams(text: str) -> set[str]:
    """
    Trigram set of a string, following pg_trgm:
    - lower-cased
    - split into words of alphanumerics
    - each word padded with two spaces in front and one behind
    """
    result: set[str] = set()
    if not text:
        return result

    for word in _WORD_RE.findall(text.lower()):
        padded = f"  {word} "
        for i in range(len(padded) - 2):
            result.add(padded[i:i + 3])
    return result


def trigram_similarity(left: str | None, right: str | None) -> float:
    """Ratio of shared trigrams to all distinct trigrams of both strings (0.0 - 1.0)."""
    if left is None or right is None:
        return 0.0

    a = trigrams(left)
    b = trigrams(right)
    if not a or not b:
        return 0.0

    shared = len(a & b)
    return shared / float(len(a) + len(b) - shared)


def split_csv_values(values: list[str] | None) -> list[str]:
    """Flatten repeated and comma-separated query values, dropping blanks."""
    if not values:
        return []
    out = []
    for raw in values:
        for part in raw.split(","):
            part = part.strip()
            if part:
                out.append(part)
    return out
