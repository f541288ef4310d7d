# coding: utf-8
"""Filesystem access for fancyindex.

The listing only ever touches the filesystem through an FsOps instance,
so tests (and odd platforms) can swap the calls out one by one.
"""
from __future__ import annotations

import os
from typing import Any, Optional, Union

from .util import fsenc


def bpath(path: Union[str, bytes]) -> bytes:
    return path if isinstance(path, bytes) else fsenc(path)


def bjoin(top: bytes, name: bytes) -> bytes:
    return top.rstrip(b"/") + b"/" + name


class FsOps(object):
    """opendir / readdir / stat / lstat / closedir on bytes paths"""

    def opendir(self, path: bytes) -> Any:
        return os.scandir(path)

    def readdir(self, dh: Any) -> Optional[bytes]:
        """next name in the directory, or None when exhausted"""
        fh = next(dh, None)
        if fh is None:
            return None
        return fh.name

    def stat(self, path: bytes) -> os.stat_result:
        return os.stat(path)

    def lstat(self, path: bytes) -> os.stat_result:
        return os.lstat(path)

    def closedir(self, dh: Any) -> None:
        dh.close()
