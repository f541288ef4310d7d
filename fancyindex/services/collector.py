# coding: utf-8
"""Directory reading for the listing.

Enumerates one directory, drops dotfiles, and stats every entry,
falling back to lstat for symlinks whose target is gone.
"""
from __future__ import annotations

import stat
from typing import TYPE_CHECKING, Any, Optional, Union

from ..codec_util import html_escape_len, uri_escape_len, utf_length
from ..fs_util import FsOps, bjoin, bpath
from ..log_util import noop
from ..util import E_STAT_LINK, ServerFault, oserr2pebkac

if TYPE_CHECKING:
    from ..log_util import NamedLogger


class DirEntry(object):
    def __init__(
        self, name: bytes, is_dir: bool, mtime: int, size: int, utf8: bool
    ) -> None:
        self.name = name
        self.is_dir = is_dir
        self.mtime = mtime
        self.size = size

        # width of the name as displayed, and how much the escapes add
        self.utf_len = utf_length(name) if utf8 else len(name)
        self.escape = uri_escape_len(name)
        self.hesc = html_escape_len(name)

    def __repr__(self) -> str:
        return "DirEntry(%r, %s, %d, %d)" % (
            self.name,
            "dir" if self.is_dir else "file",
            self.mtime,
            self.size,
        )


def probe(fs: FsOps, fpath: bytes, log: "NamedLogger") -> Optional[Any]:
    """stat an entry; None if it vanished since readdir"""
    try:
        return fs.stat(fpath)
    except OSError as ex:
        if ex.errno not in E_STAT_LINK:
            log("stat %r failed: %r" % (fpath, ex), 1)
            raise ServerFault("could not stat a directory entry", repr(ex))

    # dangling symlink, or one that loops; describe the link itself
    try:
        return fs.lstat(fpath)
    except FileNotFoundError:
        log("entry vanished: %r" % (fpath,), 6)
        return None
    except OSError as ex:
        log("lstat %r failed: %r" % (fpath, ex), 1)
        raise ServerFault("could not stat a directory entry", repr(ex))


def collect_entries(
    fs: FsOps,
    path: Union[str, bytes],
    utf8: bool,
    log: Optional["NamedLogger"] = None,
) -> list[DirEntry]:
    """Read all non-hidden entries of a directory.

    Args:
        fs: Filesystem calls to use
        path: Absolute path of the directory
        utf8: Measure names in codepoints rather than bytes
        log: Named logger

    Returns:
        Entries in directory order

    Raises:
        NotFound, AccessDenied: Directory could not be opened
        ServerFault: Any other failure; no partial result is returned
    """
    log = log or noop
    top = bpath(path)
    try:
        dh = fs.opendir(top)
    except OSError as ex:
        pbk = oserr2pebkac(ex, "cannot list this directory")
        log("opendir %r failed: %r" % (top, ex), 3 if pbk.code < 500 else 1)
        raise pbk

    ret: list[DirEntry] = []
    try:
        while True:
            try:
                name = fs.readdir(dh)
            except OSError as ex:
                log("readdir %r failed: %r" % (top, ex), 1)
                raise ServerFault("failed to read directory", repr(ex))

            if name is None:
                break

            log("file: %r" % (name,), 6)
            if not name or name.startswith(b"."):
                continue

            st = probe(fs, bjoin(top, name), log)
            if st is None:
                continue

            is_dir = stat.S_ISDIR(st.st_mode)
            ret.append(
                DirEntry(
                    name,
                    is_dir,
                    int(st.st_mtime),
                    0 if is_dir else st.st_size,
                    utf8,
                )
            )
    finally:
        try:
            fs.closedir(dh)
        except OSError as ex:
            log("closedir %r failed: %r" % (top, ex), 1)

    return ret
