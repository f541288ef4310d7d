# coding: utf-8
"""Header / footer files spliced around the listing by the http layer."""
from __future__ import annotations

import os
import threading
from typing import TYPE_CHECKING

from .config.model import INCLUDE_STATIC

if TYPE_CHECKING:
    from .log_util import NamedLogger


class IncludeCache(object):
    """
    static: read once, keep forever (a failed read included)
    cached: re-read whenever mtime or size changes
    """

    class CE(object):
        def __init__(self, mtime: float, size: int, buf: bytes) -> None:
            self.mtime = mtime
            self.size = size
            self.buf = buf

    def __init__(self, log: "NamedLogger") -> None:
        self.log = log
        self.mutex = threading.Lock()
        self.cache: dict[str, IncludeCache.CE] = {}

    def get(self, fp: str, mode: str = INCLUDE_STATIC) -> bytes:
        if not fp:
            return b""

        with self.mutex:
            ce = self.cache.get(fp)

        if ce and mode == INCLUDE_STATIC:
            return ce.buf

        try:
            st = os.stat(fp)
            if ce and ce.mtime == st.st_mtime and ce.size == st.st_size:
                return ce.buf

            with open(fp, "rb") as f:
                buf = f.read()
        except OSError as ex:
            # warn once per failure, not once per request
            if not ce or ce.size != -1:
                self.log("cannot include %r: %r" % (fp, ex), 3)

            with self.mutex:
                self.cache[fp] = IncludeCache.CE(-1, -1, b"")
            return b""

        with self.mutex:
            self.cache[fp] = IncludeCache.CE(st.st_mtime, st.st_size, buf)

        self.log("loaded %d bytes from %r" % (len(buf), fp), 6)
        return buf
