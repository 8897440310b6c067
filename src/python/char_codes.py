"""Text to byte conversion for Bloom filter keys."""


def to_char_code_array(text: str) -> bytes:
    """Convert text to one byte per UTF-16 code unit.

    Each code unit keeps only its low byte, so ASCII and Latin-1 text map
    one character to one byte and wider characters are truncated.
    """
    return text.encode('utf-16-le', 'surrogatepass')[::2]
