# coding: utf-8
"""Directory listing service: one directory in, one html page out."""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Union

from ..codec_util import escape_uri, html_bescape
from ..config.model import ListingConfig
from ..fs_util import FsOps
from ..log_util import noop
from ..time_util import Clock, LocalClock
from .collector import collect_entries
from .estimator import estimate_size
from .readme import resolve_readme
from .renderer import n_readmes, render_listing
from .sorter import sort_entries

if TYPE_CHECKING:
    from ..log_util import NamedLogger
    from ..templates import Templates


class ListingRequest(object):
    def __init__(
        self,
        path: Union[str, bytes],
        uri: bytes,
        utf8: bool,
        conf: ListingConfig,
    ) -> None:
        self.path = path
        self.uri = uri
        self.utf8 = utf8
        self.conf = conf


class ListingResult(object):
    def __init__(self, body: bytes, status: int = 200, mime: str = "text/html") -> None:
        self.body = body
        self.status = status
        self.mime = mime


def build_listing(
    req: ListingRequest,
    fs: FsOps,
    tpl: "Templates",
    clock: Optional[Clock] = None,
    log: Optional["NamedLogger"] = None,
) -> ListingResult:
    """Build the html listing for a directory.

    Args:
        req: Directory, request URI and merged config
        fs: Filesystem calls
        tpl: Template fragments
        clock: Zone offset source; host zone if None
        log: Named logger

    Returns:
        ListingResult with the complete page

    Raises:
        NotFound, AccessDenied, ServerFault: Nothing was rendered
    """
    log = log or noop
    clock = clock or LocalClock()
    conf = req.conf

    log("fancyindex: %r" % (req.path,), 6)

    entries = collect_entries(fs, req.path, req.utf8, log)
    sort_entries(entries)

    readme_ref = resolve_readme(fs, req.path, conf.readme or b"", log)

    uri_html = html_bescape(req.uri)
    uri_href = escape_uri(req.uri)
    nrm = n_readmes(conf.readme_flags or 0)

    cap = estimate_size(tpl, uri_html, uri_href, readme_ref, nrm, entries)
    body = render_listing(
        tpl,
        uri_html,
        uri_href,
        entries,
        conf,
        req.utf8,
        readme_ref,
        clock.gmtoff(),
        cap,
        log,
    )

    log("%d entries, %d of %d bytes" % (len(entries), len(body), cap), 6)
    return ListingResult(body)
