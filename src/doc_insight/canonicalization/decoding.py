"""
Decoding of uploaded document bytes.
"""

from typing import Tuple

import charset_normalizer


def decode_document_bytes(data: bytes) -> Tuple[str, str]:
    """
    Decode uploaded bytes to text.

    Tries UTF-8 (with or without BOM) first, then charset detection, then
    UTF-8 with replacement characters.

    Args:
        data: Raw file content

    Returns:
        (text, encoding) tuple
    """
    if not data:
        return "", "utf-8"

    try:
        return data.decode("utf-8-sig"), "utf-8"
    except UnicodeDecodeError:
        pass

    detected = charset_normalizer.from_bytes(data).best()
    if detected is not None:
        return str(detected), detected.encoding

    return data.decode("utf-8", errors="replace"), "utf-8"
