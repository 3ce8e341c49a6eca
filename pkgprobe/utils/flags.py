SEPARATORS = frozenset(b" \t\r\n")
BACKSLASH = ord("\\")


def split_flags(output: bytes) -> list[str]:
    """
    Split output produced by ``pkg-config --cflags`` and/or ``--libs`` into separate flags.

    A backslash preserves the literal meaning of the byte that follows it.
    Words are separated by unescaped space; other whitespace should not occur
    unescaped apart from the trailing newline, but like other consumers of
    pkg-config output we split on tab, carriage return and newline as well.

    Args:
        output (bytes): Raw standard output of pkg-config.

    Returns:
        list[str]: The words, decoded as UTF-8, in order of appearance.
    """
    words = []
    word = bytearray()
    escaped = False

    for b in output:
        if escaped:
            escaped = False
            word.append(b)
        elif b == BACKSLASH:
            escaped = True
        elif b in SEPARATORS:
            if word:
                words.append(word.decode("utf-8"))
                word = bytearray()
        else:
            word.append(b)

    if word:
        words.append(word.decode("utf-8"))

    return words
