"""ZPL run-length compression for ASCII hex graphic data.

A repeat count is written as up to two letters before the repeated
character:

- ``G``..``Y`` add 1..19
- ``g``..``z`` add 20..400 (in steps of 20)

so a single code covers at most 419 repeats. Two characters stand for a
whole row: ``,`` fills the row with ``0`` and ``!`` fills it with ``F``.
A ``:`` repeats the previous row; that one is handled by the assembler.
"""

MAX_REPEAT = 419

# Index 0 is unused in both alphabets
LOW_CODES = " GHIJKLMNOPQRSTUVWXY"
HIGH_CODES = " ghijklmnopqrstuvwxyz"

WHITE_ROW = ","
BLACK_ROW = "!"
REPEAT_ROW = ":"

# Runs up to this length are cheaper written out
LITERAL_RUN_MAX = 4


def _single_code(count: int, char: str) -> str:
    high, low = divmod(count, 20)
    code = ""
    if high > 0:
        code += HIGH_CODES[high]
    if low > 0:
        code += LOW_CODES[low]
    return code + char


def repeat_code(count: int, char: str) -> str:
    """Encode ``count`` repeats of ``char``.

    Counts above 419 are split into full 419-repeat codes followed by a
    code for the remainder.
    """
    codes = []
    while count > MAX_REPEAT:
        codes.append(_single_code(MAX_REPEAT, char))
        count -= MAX_REPEAT
    codes.append(_single_code(count, char))
    return "".join(codes)


def _encode_run(char: str, count: int) -> str:
    if count > LITERAL_RUN_MAX:
        return repeat_code(count, char)
    return char * count


def compress_ascii(hexstr: str) -> str:
    """Compress one row of uppercase hex digits.

    Args:
        hexstr: Hex digits of a single row, without line breaks.

    Returns:
        The compressed row. An empty row compresses to an empty string.
    """
    if not hexstr:
        return ""

    parts: list[str] = []
    run_char = hexstr[0]
    run_start = 0
    for i, char in enumerate(hexstr):
        if char == run_char:
            continue
        parts.append(_encode_run(run_char, i - run_start))
        run_char = char
        run_start = i

    # The whole row is one run
    if run_start == 0:
        if run_char == "0":
            return WHITE_ROW
        if run_char == "F":
            return BLACK_ROW

    parts.append(_encode_run(run_char, len(hexstr) - run_start))
    compressed = "".join(parts)
    if not compressed:
        compressed = repeat_code(len(hexstr), run_char)
    return compressed
