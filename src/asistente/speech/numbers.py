"""Spanish number verbalization.

Converts non-negative integers to Spanish words for narration:
  21       -> "veintiuno"
  101      -> "ciento uno"
  21000    -> "veintiún mil"
  2500000  -> "dos millones quinientos mil"
"""

UNITS = {
    0: "cero",
    1: "uno",
    2: "dos",
    3: "tres",
    4: "cuatro",
    5: "cinco",
    6: "seis",
    7: "siete",
    8: "ocho",
    9: "nueve",
    10: "diez",
    11: "once",
    12: "doce",
    13: "trece",
    14: "catorce",
    15: "quince",
    16: "dieciséis",
    17: "diecisiete",
    18: "dieciocho",
    19: "diecinueve",
    20: "veinte",
    21: "veintiuno",
    22: "veintidós",
    23: "veintitrés",
    24: "veinticuatro",
    25: "veinticinco",
    26: "veintiséis",
    27: "veintisiete",
    28: "veintiocho",
    29: "veintinueve",
}

TENS = {
    30: "treinta",
    40: "cuarenta",
    50: "cincuenta",
    60: "sesenta",
    70: "setenta",
    80: "ochenta",
    90: "noventa",
}

HUNDREDS = {
    100: "ciento",
    200: "doscientos",
    300: "trescientos",
    400: "cuatrocientos",
    500: "quinientos",
    600: "seiscientos",
    700: "setecientos",
    800: "ochocientos",
    900: "novecientos",
}

_THOUSAND = 1_000
_MILLION = 1_000_000


def _below_hundred(n: int) -> str:
    if n < 30:
        return UNITS[n]
    tens, unit = divmod(n, 10)
    if unit == 0:
        return TENS[tens * 10]
    return f"{TENS[tens * 10]} y {UNITS[unit]}"


def _below_thousand(n: int) -> str:
    if n < 100:
        return _below_hundred(n)
    if n == 100:
        return "cien"
    hundreds, rest = divmod(n, 100)
    word = HUNDREDS[hundreds * 100]
    if rest == 0:
        return word
    return f"{word} {_below_hundred(rest)}"


def _multiplier(n: int) -> str:
    """Words for a count that precedes "mil" or "millones".

    A count ending in one drops its final vowel before the noun:
    "veintiún mil", "treinta y un millones".
    """
    words = number_to_words(n)
    if words.endswith("veintiuno"):
        return words[: -len("veintiuno")] + "veintiún"
    if words.endswith("uno"):
        return words[: -len("uno")] + "un"
    return words


def number_to_words(n: int) -> str:
    """Convert a non-negative integer to Spanish words.

    Args:
        n: Integer to verbalize (0 or greater)

    Returns:
        Lowercase Spanish words for the number

    Raises:
        TypeError: If n is not an int (bools are rejected too)
        ValueError: If n is negative
    """
    if isinstance(n, bool) or not isinstance(n, int):
        raise TypeError(f"Expected int, got {type(n).__name__}")
    if n < 0:
        raise ValueError(f"Cannot verbalize negative number: {n}")

    if n < _THOUSAND:
        return _below_thousand(n)

    if n < _MILLION:
        thousands, rest = divmod(n, _THOUSAND)
        head = "mil" if thousands == 1 else f"{_multiplier(thousands)} mil"
    else:
        millions, rest = divmod(n, _MILLION)
        head = "un millón" if millions == 1 else f"{_multiplier(millions)} millones"

    if rest == 0:
        return head
    return f"{head} {number_to_words(rest)}"
