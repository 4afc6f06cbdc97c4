"""Cross-reference identifier helpers."""


def canonicalize_id(xref_id: str | None) -> str:
    """
    Return `xref_id` in its canonical '@token@' form.

    'I5' and '@I5@' both give '@I5@'. Empty input gives an empty string.
    """
    if not xref_id:
        return ""
    if xref_id.startswith("@") and xref_id.endswith("@"):
        return xref_id
    return f"@{xref_id}@"


def bare_id(xref_id: str) -> str:
    """Strip the surrounding '@' markers from an identifier like '@I_347421849@'."""
    return xref_id.strip().strip("@")


def is_pointer(value: str | None) -> bool:
    """True for a cross-reference value such as '@F1@'."""
    return bool(value) and len(value) > 2 and value.startswith("@") and value.endswith("@")
