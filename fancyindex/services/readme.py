# coding: utf-8
from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

from ..codec_util import escape_uri
from ..fs_util import FsOps, bjoin, bpath
from ..log_util import noop

if TYPE_CHECKING:
    from ..log_util import NamedLogger


def resolve_readme(
    fs: FsOps,
    path: Union[str, bytes],
    name: bytes,
    log: Optional["NamedLogger"] = None,
) -> Optional[bytes]:
    """Reference to put in the readme iframe, or None if there is no readme.

    Anything that stops the file from being stat'ed counts as absent;
    the file itself is never read.
    """
    if not name:
        return None

    fpath = bjoin(bpath(path), name)
    try:
        fs.stat(fpath)
    except OSError as ex:
        (log or noop)("no readme at %r: %r" % (fpath, ex), 6)
        return None

    return escape_uri(name)
