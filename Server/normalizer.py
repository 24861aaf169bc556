"""
FileDepot Server - Filename Normalization

Turns user supplied names into names that are safe to use on disk.
"""

# Characters removed from names
ILLEGAL_CHARACTERS = '/\\?%*:|"<>'

_ILLEGAL_TABLE = str.maketrans('', '', ILLEGAL_CHARACTERS)


def NormalizeFilename(name: str) -> str:
    """
    Normalize a filename by removing illegal characters

    Illegal characters are dropped, not replaced. Spaces become hyphens.
    The result may be empty; callers decide whether that is acceptable.

    Args:
        name: Raw filename

    Returns:
        str: Normalized filename
    """
    name = name.translate(_ILLEGAL_TABLE)
    return name.replace(' ', '-')  # for convenience
