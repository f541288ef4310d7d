# coding: utf-8
"""Output size estimation.

The renderer writes into a buffer that cannot grow, so this has to be an
upper bound of what it writes; overshooting by a few dozen bytes per row
is fine, undershooting is a bug.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from .collector import DirEntry
from .formatter import NAME_LEN

if TYPE_CHECKING:
    from ..templates import Templates

# row markup; "X" stands in for the even/odd class letter
ROW_1 = b'<tr class="X"><td><a href="'
ROW_2 = b'">'
ROW_3 = b"</a></td><td>"
ROW_4 = b"</td><td>"
ROW_5 = b"</td></tr>"
CRLF = b"\r\n"

IFRAME_1 = b'<iframe id="readme" src="'
IFRAME_2 = b'">(readme file)</iframe>'

# widest size column: 19-digit exact size, plus one
SIZE_ALLOWANCE = 20
DATE_ALLOWANCE = len(b" 28-Sep-1970 12:00 ")

ROW_FIXED = (
    len(ROW_1)
    + len(ROW_2)
    + len(b"&gt;")
    + len(ROW_3)
    + SIZE_ALLOWANCE
    + len(ROW_4)
    + DATE_ALLOWANCE
    + len(ROW_5 + b"\n")
    + len(CRLF)
)


def entry_size(entry: DirEntry) -> int:
    """Upper bound of the bytes one row takes."""
    return (
        ROW_FIXED
        # href; percent-escaped name plus the directory slash
        + len(entry.name)
        + entry.escape
        + 1
        # visible name; html-escaped prefix plus slash or ellipsis
        + len(entry.name)
        + entry.hesc
        + entry.utf_len
        + NAME_LEN
    )


def readme_size(uri_href: bytes, readme_ref: bytes) -> int:
    return (
        3  # "/" + CRLF
        + len(IFRAME_1)
        + len(uri_href)
        + len(readme_ref)
        + len(IFRAME_2)
    )


def estimate_size(
    tpl: "Templates",
    uri_html: bytes,
    uri_href: bytes,
    readme_ref: Optional[bytes],
    n_readmes: int,
    entries: list[DirEntry],
) -> int:
    """Compute the capacity needed for the listing document.

    Args:
        tpl: Template fragments
        uri_html: Request URI as shown in the title and heading
        uri_href: Request URI as used in the readme link
        readme_ref: Escaped readme name, None if there is no readme
        n_readmes: How many times the readme markup is emitted
        entries: Directory entries

    Returns:
        Byte count that the rendered document will not exceed
    """
    ret = tpl.size + 2 * len(uri_html)

    if readme_ref is not None:
        ret += n_readmes * readme_size(uri_href, readme_ref)

    for entry in entries:
        ret += entry_size(entry)

    return ret
