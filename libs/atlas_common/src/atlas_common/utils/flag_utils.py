"""Flag emoji derivation from ISO 3166-1 alpha-2 codes.

A flag is rendered by pairing two regional indicator symbols, one per letter
of the country code. The mapping is pure: the same code always yields the
same flag.
"""

__all__ = ["PLACEHOLDER_FLAG", "REGIONAL_INDICATOR_OFFSET", "flag_emoji"]

# ord("A") + 127397 == U+1F1E6 REGIONAL INDICATOR SYMBOL LETTER A
REGIONAL_INDICATOR_OFFSET = 127397

# White flag, shown for codes that have no regional indicator pair
PLACEHOLDER_FLAG = "\U0001f3f3\ufe0f"


def flag_emoji(iso2_code: str) -> str:
    """Build the flag emoji for a two-letter country code.

    Args:
        iso2_code: Provider country code, case-insensitive (e.g. "us", "FR").

    Returns:
        The two regional indicator symbols for the code, or PLACEHOLDER_FLAG when
        the code is not exactly two ASCII letters.

    Example:
        >>> flag_emoji("ua")
        '🇺🇦'
        >>> flag_emoji("1A") == PLACEHOLDER_FLAG
        True
    """
    # Checked before upper(), which can turn one character into two ("ß" -> "SS")
    if len(iso2_code) != 2 or not all(
        char.isascii() and char.isalpha() for char in iso2_code
    ):
        return PLACEHOLDER_FLAG

    code = iso2_code.upper()
    return "".join(chr(ord(char) + REGIONAL_INDICATOR_OFFSET) for char in code)
