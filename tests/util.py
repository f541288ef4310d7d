"""Shared helpers for the unit tests."""

import errno
import os
import stat
from types import SimpleNamespace
from typing import Dict, List, Optional, Tuple

from fancyindex.fs_util import FsOps

# 2021-03-04 05:06:07 UTC
T0 = 1614834367


def oserr(code: int, path: bytes = b"") -> OSError:
    """OSError for an errno; the constructor picks the matching subclass"""
    return OSError(code, os.strerror(code), path)


class MemFs(FsOps):
    """In-memory FsOps with failures injected per path.

    Nodes are keyed by absolute bytes path and hold (is_dir, size, mtime);
    a directory lists every node whose parent it is, in insertion order.
    """

    def __init__(self, nodes: Optional[Dict[bytes, Tuple[bool, int, int]]] = None) -> None:
        self.nodes: Dict[bytes, Tuple[bool, int, int]] = {b"/d": (True, 0, T0)}
        self.nodes.update(nodes or {})

        self.opendir_err: Optional[int] = None
        self.readdir_err: Optional[int] = None
        self.closedir_err: Optional[int] = None
        self.stat_errs: Dict[bytes, int] = {}
        self.lstat_errs: Dict[bytes, int] = {}

        # names readdir returns without a node behind them
        self.ghosts: List[bytes] = []

        self.opened = 0
        self.closed = 0

    def add(self, path: bytes, is_dir: bool = False, size: int = 0, mtime: int = T0) -> None:
        self.nodes[path] = (is_dir, size, mtime)

    def opendir(self, path: bytes):
        if self.opendir_err:
            raise oserr(self.opendir_err, path)

        if path not in self.nodes:
            raise oserr(errno.ENOENT, path)

        if not self.nodes[path][0]:
            raise oserr(errno.ENOTDIR, path)

        self.opened += 1
        names = [k.rsplit(b"/", 1)[1] for k in self.nodes if k.rsplit(b"/", 1)[0] == path]
        return iter(names + list(self.ghosts))

    def readdir(self, dh) -> Optional[bytes]:
        if self.readdir_err:
            raise oserr(self.readdir_err)
        return next(dh, None)

    def stat(self, path: bytes):
        if path in self.stat_errs:
            raise oserr(self.stat_errs[path], path)
        return self._st(path)

    def lstat(self, path: bytes):
        if path in self.lstat_errs:
            raise oserr(self.lstat_errs[path], path)
        return self._st(path)

    def closedir(self, dh) -> None:
        self.closed += 1
        if self.closedir_err:
            raise oserr(self.closedir_err)

    def _st(self, path: bytes):
        try:
            is_dir, size, mtime = self.nodes[path]
        except KeyError:
            raise oserr(errno.ENOENT, path)

        mode = (stat.S_IFDIR | 0o755) if is_dir else (stat.S_IFREG | 0o644)
        return SimpleNamespace(st_mode=mode, st_size=size, st_mtime=mtime)


class FakeTemplates(object):
    """Template fragments with visible markers, for checking the page layout"""

    def __init__(self) -> None:
        self.frags = {
            "head1": b"<title>",
            "head2": b"</title>",
            "body1": b"<h1>",
            "body2": b"</h1>\n",
            "list1": b"<table>\n",
            "list2": b"</table>\n",
            "body3": b"",
            "body4": b"</body>",
            "foot1": b"</html>",
        }
        self.size = sum(len(x) for x in self.frags.values())

    def __getattr__(self, name: str) -> bytes:
        try:
            return self.__dict__["frags"][name]
        except KeyError:
            raise AttributeError(name)
