# coding: utf-8
"""Assembles the listing page from template fragments and table rows."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..config.model import (
    README_BOTTOM,
    README_IFRAME,
    README_TOP,
    ListingConfig,
    readme_placements,
)
from ..log_util import noop
from ..util import ServerFault
from .collector import DirEntry
from .estimator import CRLF, IFRAME_1, IFRAME_2, ROW_2, ROW_3, ROW_4, ROW_5
from .formatter import format_entry

if TYPE_CHECKING:
    from ..log_util import NamedLogger
    from ..templates import Templates

ROW_CLS = (b'<tr class="e"><td><a href="', b'<tr class="o"><td><a href="')


class OutBuf(object):
    """Fixed-capacity output; writing past the end is an error, not a resize."""

    def __init__(self, cap: int) -> None:
        self.cap = cap
        self.buf = bytearray(cap)
        self.pos = 0

    def put(self, b: bytes) -> None:
        end = self.pos + len(b)
        if end > self.cap:
            t = "wrote %d bytes into a buffer of %d" % (end, self.cap)
            raise ServerFault("listing outgrew its estimated size", t)

        self.buf[self.pos : end] = b
        self.pos = end

    def getvalue(self) -> bytes:
        return bytes(self.buf[: self.pos])


def n_readmes(flags: int) -> int:
    """how many iframes will be emitted for an existing readme"""
    if not flags & README_IFRAME:
        return 0
    return len(readme_placements(flags))


def _readme(
    ob: OutBuf,
    where: int,
    uri_href: bytes,
    readme_ref: Optional[bytes],
    flags: int,
    log: "NamedLogger",
) -> None:
    if readme_ref is None or where not in readme_placements(flags):
        return

    if not flags & README_IFRAME:
        log("bad readme_flags combination %#x" % (flags,), 3)
        return

    ob.put(IFRAME_1)
    ob.put(uri_href)
    if not uri_href.endswith(b"/"):
        ob.put(b"/")
    ob.put(readme_ref)
    ob.put(IFRAME_2)
    ob.put(CRLF)


def render_listing(
    tpl: "Templates",
    uri_html: bytes,
    uri_href: bytes,
    entries: list[DirEntry],
    conf: ListingConfig,
    utf8: bool,
    readme_ref: Optional[bytes],
    gmtoff: int,
    cap: int,
    log: Optional["NamedLogger"] = None,
) -> bytes:
    """Write the listing page.

    Args:
        tpl: Template fragments
        uri_html: Request URI, html-escaped, for the title and heading
        uri_href: Request URI, percent-escaped, for the readme link
        entries: Sorted directory entries
        conf: Merged listing config
        utf8: Names are utf-8
        readme_ref: Escaped readme name, None if there is no readme
        gmtoff: Zone offset in minutes
        cap: Buffer size from estimate_size

    Returns:
        The complete document
    """
    log = log or noop
    flags = conf.readme_flags or 0
    ob = OutBuf(cap)

    ob.put(tpl.head1)
    ob.put(uri_html)
    ob.put(tpl.head2)

    ob.put(tpl.body1)
    ob.put(uri_html)
    ob.put(tpl.body2)

    _readme(ob, README_TOP, uri_href, readme_ref, flags, log)

    ob.put(tpl.list1)

    for n, entry in enumerate(entries):
        row = format_entry(entry, utf8, bool(conf.exact_size), gmtoff, bool(conf.localtime))
        ob.put(ROW_CLS[n & 1])
        ob.put(row.href)
        ob.put(ROW_2)
        ob.put(row.text)
        ob.put(ROW_3)
        ob.put(row.size)
        ob.put(ROW_4)
        ob.put(row.date)
        ob.put(ROW_5)
        ob.put(CRLF)

    ob.put(tpl.list2)
    ob.put(tpl.body3)

    _readme(ob, README_BOTTOM, uri_href, readme_ref, flags, log)

    ob.put(tpl.body4)
    ob.put(tpl.foot1)

    return ob.getvalue()
