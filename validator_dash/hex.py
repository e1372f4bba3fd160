"""Address string helpers."""


def address_key(value: str) -> str:
    """Lookup key for an address: surrounding whitespace dropped, lowercased."""
    return value.strip().lower()
