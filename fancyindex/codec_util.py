"""Codec utilities for fancyindex.

Handles escaping of raw filesystem names for URLs and HTML, and the
utf-8 aware length / truncation helpers. Names stay bytes throughout so
that undecodable names survive unchanged.
"""

import html

# bytes which get percent-escaped inside a href; same set as nginx's
# html escape table plus the characters html itself cares about
URI_UNSAFE = set(range(0x20)) | set(range(0x7F, 0x100)) | set(b" \"#%&'<>?")

_uqtl = {
    n: ("%%%02X" % (n,) if n in URI_UNSAFE else chr(n)).encode("ascii")
    for n in range(256)
}

_hesc = [
    (b"&", b"&amp;"),
    (b"<", b"&lt;"),
    (b">", b"&gt;"),
    (b'"', b"&quot;"),
    (b"'", b"&#x27;"),
]


def escape_uri(txt: bytes) -> bytes:
    """url quoter for raw names; keeps everything html-safe as-is"""
    if not txt:
        return b""
    lut = _uqtl
    return b"".join([lut[ch] for ch in txt])


def uri_escape_len(txt: bytes) -> int:
    """Number of bytes escape_uri adds to txt.

    Args:
        txt: Raw name

    Returns:
        Two extra bytes for every escaped byte
    """
    unsafe = URI_UNSAFE
    return 2 * sum(1 for ch in txt if ch in unsafe)


def html_escape(s: str, quot: bool = False, crlf: bool = False) -> str:
    """Escape HTML special characters.

    Args:
        s: String to escape
        quot: Whether to escape quotes
        crlf: Whether to escape CRLF

    Returns:
        HTML-escaped string
    """
    s = html.escape(s, quote=quot)
    if crlf:
        s = s.replace("\r", "&#13;").replace("\n", "&#10;")
    return s


def html_bescape(s: bytes) -> bytes:
    """Escape HTML special characters in bytes, quotes included.

    Args:
        s: Bytes to escape

    Returns:
        HTML-escaped bytes; anything else is passed through untouched
    """
    for a, b in _hesc:
        if a in s:
            s = s.replace(a, b)
    return s


def html_escape_len(s: bytes) -> int:
    """Number of bytes html_bescape adds to s."""
    return sum(s.count(a) * (len(b) - 1) for a, b in _hesc)


def utf_length(s: bytes) -> int:
    """Count codepoints; each byte of a malformed sequence counts as one.

    Args:
        s: Raw name, presumably utf-8

    Returns:
        Display width in codepoints
    """
    return len(s.decode("utf-8", "surrogateescape"))


def utf_cpystrn(s: bytes, n: int) -> bytes:
    """Return the first n codepoints of s, never splitting a sequence.

    Args:
        s: Raw name, presumably utf-8
        n: Number of codepoints to keep

    Returns:
        Prefix of s
    """
    return s.decode("utf-8", "surrogateescape")[:n].encode("utf-8", "surrogateescape")
