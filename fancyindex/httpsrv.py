# coding: utf-8
from __future__ import annotations

import http.server
import threading
from typing import TYPE_CHECKING, Optional

from .fs_util import FsOps
from .httpcli import HttpCli
from .include_util import IncludeCache
from .log_util import NamedLog
from .time_util import Clock, LocalClock

if TYPE_CHECKING:
    from .config.merger import ConfigMerger
    from .log_util import RootLogger
    from .templates import Templates


class HttpSrv(object):
    """
    owns the listening socket and everything the request handlers share;
    all of it is read-only after startup except the include cache
    """

    def __init__(
        self,
        root: str,
        merger: "ConfigMerger",
        tpl: "Templates",
        log: "RootLogger",
        utf8: bool = True,
        fs: Optional[FsOps] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.root = root
        self.merger = merger
        self.tpl = tpl
        self.log = log
        self.utf8 = utf8
        self.fs = fs or FsOps()
        self.clock = clock or LocalClock()
        self.includes = IncludeCache(NamedLog(log, "include"))

        self.srv: Optional[http.server.ThreadingHTTPServer] = None
        self.thr: Optional[threading.Thread] = None

    def listen(self, host: str, port: int) -> tuple[str, int]:
        srv = http.server.ThreadingHTTPServer((host, port), HttpCli)
        srv.daemon_threads = True
        srv.hsrv = self  # type: ignore
        self.srv = srv

        addr = srv.server_address[:2]
        self.log("httpsrv", "listening on %s:%s, serving %s" % (addr[0], addr[1], self.root), 2)
        return addr[0], addr[1]

    def serve_forever(self) -> None:
        assert self.srv  # !rm
        self.srv.serve_forever()

    def start(self) -> None:
        """serve from a background thread"""
        self.thr = threading.Thread(target=self.serve_forever, name="httpsrv", daemon=True)
        self.thr.start()

    def shutdown(self) -> None:
        if not self.srv:
            return

        self.srv.shutdown()
        self.srv.server_close()
        if self.thr:
            self.thr.join()

        self.srv = None
        self.log("httpsrv", "stopped", 6)
