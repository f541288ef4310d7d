# coding: utf-8
"""Turns a DirEntry into the strings that go into its table row.

Everything here is pure; the estimator relies on the size limits
documented next to each constant.
"""
from __future__ import annotations

from ..codec_util import escape_uri, html_bescape, utf_cpystrn
from ..time_util import fmt_listing_date
from .collector import DirEntry

# widest name shown before truncating, in display units
NAME_LEN = 50

# appended to truncated names, renders as "..>"
ELLIPSIS = b"..&gt;"

KIB = 1024
MIB = 1024 * 1024
GIB = 1024 * 1024 * 1024

# exact sizes are right-aligned to this many columns
EXACT_WIDTH = 19


class DisplayRow(object):
    def __init__(self, href: bytes, text: bytes, size: bytes, date: bytes) -> None:
        self.href = href
        self.text = text
        self.size = size
        self.date = date

    def __repr__(self) -> str:
        return "DisplayRow(%r, %r, %r, %r)" % (self.href, self.text, self.size, self.date)


def fmt_href(entry: DirEntry) -> bytes:
    ret = escape_uri(entry.name)
    if entry.is_dir:
        ret += b"/"
    return ret


def fmt_name(entry: DirEntry, utf8: bool) -> bytes:
    """Visible name, html-escaped, truncated to NAME_LEN units.

    Names wider than NAME_LEN keep NAME_LEN - 3 units followed by the
    ellipsis and never get the directory slash; narrower directories get
    a trailing slash.
    """
    if entry.utf_len > NAME_LEN:
        n = NAME_LEN - 3
        keep = utf_cpystrn(entry.name, n) if utf8 else entry.name[:n]
        return html_bescape(keep) + ELLIPSIS

    ret = html_bescape(entry.name)
    if entry.is_dir and NAME_LEN - entry.utf_len > 0:
        ret += b"/"
    return ret


def scale_size(length: int) -> tuple[int, str]:
    """Size as (magnitude, suffix), rounding half up; no suffix below 10000 bytes"""
    if length > GIB - 1:
        size, rem = divmod(length, GIB)
        if rem > GIB // 2 - 1:
            size += 1
        return size, "G"

    if length > MIB - 1:
        size, rem = divmod(length, MIB)
        if rem > MIB // 2 - 1:
            size += 1
        return size, "M"

    if length > 9999:
        size, rem = divmod(length, KIB)
        if rem > KIB // 2 - 1:
            size += 1
        return size, "K"

    return length, ""


def fmt_size(entry: DirEntry, exact: bool) -> bytes:
    if entry.is_dir:
        return b"-"

    if exact:
        return b"%*d" % (EXACT_WIDTH, entry.size)

    size, scale = scale_size(entry.size)
    if scale:
        return b"%4d%s" % (size, scale.encode("ascii"))

    return b" %4d" % (size,)


def format_entry(
    entry: DirEntry, utf8: bool, exact: bool, gmtoff: int, localtime: bool
) -> DisplayRow:
    return DisplayRow(
        fmt_href(entry),
        fmt_name(entry, utf8),
        fmt_size(entry, exact),
        fmt_listing_date(entry.mtime, gmtoff, localtime),
    )
