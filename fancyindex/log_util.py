# coding: utf-8
"""Console logging for fancyindex.

Everything logs through a plain callable instead of the logging module;
the root logger takes (src, msg, c) and each component gets a named
logger taking (msg, c), where c is a severity / colour code:

    0 info, 1 error, 2 ok, 3 warning, 5 notice, 6 debug
"""
from __future__ import annotations

import sys
import threading
import time
from typing import IO, TYPE_CHECKING, Optional, Union

from .__init__ import VT100

if TYPE_CHECKING:
    from typing import Protocol

    class RootLogger(Protocol):
        def __call__(self, src: str, msg: str, c: Union[int, str] = 0) -> None:
            return None

    class NamedLogger(Protocol):
        def __call__(self, msg: str, c: Union[int, str] = 0) -> None:
            return None


def noop(*a, **ka):
    pass


class Logger(object):
    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        stream: Optional[IO[str]] = None,
        colors: Optional[bool] = None,
    ) -> None:
        self.verbose = verbose
        self.quiet = quiet
        self.stream = stream or sys.stdout
        if colors is None:
            colors = VT100 and hasattr(self.stream, "isatty") and self.stream.isatty()

        self.colors = colors
        self.mutex = threading.Lock()

    def __call__(self, src: str, msg: str, c: Union[int, str] = 0) -> None:
        if c == 6 and not self.verbose:
            return

        if self.quiet and c not in (1, 3):
            return

        now = time.time()
        ts = "%s.%03d" % (time.strftime("%H:%M:%S", time.localtime(now)), (now % 1) * 1000)
        if not self.colors:
            ln = "%s %-21s %s\n" % (ts, src, msg)
        else:
            if not c:
                fmt = "\033[36m%s \033[33m%-21s \033[0m%s\033[0m\n"
            elif isinstance(c, int):
                fmt = "\033[36m%s \033[33m%-21s \033[0m\033[3{}m%s\033[0m\n".format(c)
            else:
                fmt = "\033[36m%s \033[33m%-21s \033[0m" + c + "%s\033[0m\n"

            ln = fmt % (ts, src, msg)

        with self.mutex:
            self.stream.write(ln)
            self.stream.flush()

    def named(self, src: str) -> "NamedLogger":
        return NamedLog(self, src)


class NamedLog(object):
    def __init__(self, root: "RootLogger", src: str) -> None:
        self.root = root
        self.src = src

    def __call__(self, msg: str, c: Union[int, str] = 0) -> None:
        self.root(self.src, msg, c)
