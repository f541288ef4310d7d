# coding: utf-8
from __future__ import annotations

import errno
import os
import sys
import traceback
from typing import Optional


def _ens(want: str) -> tuple[int, ...]:
    ret: list[int] = []
    for v in want.split():
        try:
            ret.append(getattr(errno, v))
        except AttributeError:
            pass

    return tuple(ret)


# opendir failures, by the status they turn into
E_DIR_404 = _ens("ENOENT ENOTDIR ENAMETOOLONG")
E_DIR_403 = _ens("EACCES EPERM")

# stat failures that warrant a second look with lstat
E_STAT_LINK = _ens("ENOENT ELOOP")

HTTPCODE = {
    200: "OK",
    301: "Moved Permanently",
    304: "Not Modified",
    400: "Bad Request",
    403: "Forbidden",
    404: "Not Found",
    405: "Method Not Allowed",
    500: "Internal Server Error",
    501: "Not Implemented",
    503: "Service Unavailable",
}


class Pebkac(Exception):
    def __init__(
        self, code: int, msg: Optional[str] = None, log: Optional[str] = None
    ) -> None:
        super(Pebkac, self).__init__(msg or HTTPCODE[code])
        self.code = code
        self.log = log

    def __repr__(self) -> str:
        return "Pebkac({}, {})".format(self.code, repr(self.args))


class NotFound(Pebkac):
    def __init__(self, msg: Optional[str] = None, log: Optional[str] = None) -> None:
        super(NotFound, self).__init__(404, msg, log)


class AccessDenied(Pebkac):
    def __init__(self, msg: Optional[str] = None, log: Optional[str] = None) -> None:
        super(AccessDenied, self).__init__(403, msg, log)


class ServerFault(Pebkac):
    def __init__(self, msg: Optional[str] = None, log: Optional[str] = None) -> None:
        super(ServerFault, self).__init__(500, msg, log)


def oserr2pebkac(ex: OSError, msg: str) -> Pebkac:
    """classify an opendir failure"""
    zi = getattr(ex, "errno", 0)
    if zi in E_DIR_404:
        return NotFound(msg)
    if zi in E_DIR_403:
        return AccessDenied(msg)
    return ServerFault(msg, repr(ex))


def min_ex(max_lines: int = 8, reverse: bool = False) -> str:
    et, ev, tb = sys.exc_info()
    stb = traceback.extract_tb(tb) if tb else traceback.extract_stack()[:-1]
    fmt = "%s:%d <%s>: %s"
    ex = [fmt % (fp.split(os.sep)[-1], ln, fun, txt) for fp, ln, fun, txt in stb]
    if et or ev or tb:
        ex.append("[%s] %s" % (et.__name__ if et else "(anonymous)", ev))
    return "\n".join(ex[-max_lines:][:: -1 if reverse else 1])


def fsenc(txt: str) -> bytes:
    return os.fsencode(txt)


def fsdec(txt: bytes) -> str:
    return os.fsdecode(txt)
