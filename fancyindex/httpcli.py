# coding: utf-8
from __future__ import annotations

import http.server
import mimetypes
import os
import shutil
import stat
from typing import TYPE_CHECKING, Union
from urllib.parse import unquote_to_bytes, urlsplit

from .__version__ import S_VERSION
from .codec_util import escape_uri, html_escape
from .config.model import INCLUDE_STATIC
from .fs_util import bpath
from .services import ListingRequest, build_listing
from .time_util import formatdate
from .util import AccessDenied, NotFound, Pebkac, fsdec, min_ex, oserr2pebkac

if TYPE_CHECKING:
    from .httpsrv import HttpSrv


def sanitize_vpath(raw: bytes) -> tuple[list[bytes], bool]:
    """split a decoded request path into clean segments; refuses to go above /"""
    segs: list[bytes] = []
    for seg in raw.split(b"/"):
        if seg in (b"", b"."):
            continue
        if seg == b"..":
            if not segs:
                raise AccessDenied("path leads outside the served directory")
            segs.pop()
            continue
        segs.append(seg)

    return segs, raw.endswith(b"/")


class HttpCli(http.server.BaseHTTPRequestHandler):
    """one instance per request; everything shared lives in self.server.hsrv"""

    server_version = "fancyindex/" + S_VERSION

    # set once a status line and headers went out for this request
    sent_headers = False

    @property
    def hsrv(self) -> "HttpSrv":
        return self.server.hsrv  # type: ignore

    def log(self, msg: str, c: Union[int, str] = 0) -> None:
        self.hsrv.log("%s %s" % self.client_address[:2], msg, c)

    def log_message(self, format: str, *args) -> None:
        self.log(format % args)

    def do_GET(self) -> None:
        self.handle_req(True)

    def do_HEAD(self) -> None:
        self.handle_req(False)

    def do_not_allowed(self) -> None:
        self.reply_err(405, "method not allowed", True, {"Allow": "GET, HEAD"})

    do_POST = do_PUT = do_DELETE = do_PATCH = do_not_allowed

    def end_headers(self) -> None:
        super().end_headers()
        self.sent_headers = True

    def handle_req(self, send_body: bool) -> None:
        self.sent_headers = False
        try:
            self.tx(send_body)
        except Pebkac as ex:
            self.log("%s: %s" % (ex.code, ex), 3 if ex.code < 500 else 1)
            if ex.log:
                self.log("additional error context:\n" + ex.log, 6)
            self.reply_err(ex.code, str(ex), send_body)
        except (BrokenPipeError, ConnectionResetError):
            self.log("client disconnected", 6)
        except Exception:
            self.log("unhandled exception:\n" + min_ex(), 1)
            self.reply_err(500, "server error", send_body)

    def tx(self, send_body: bool) -> None:
        upath = unquote_to_bytes(urlsplit(self.path).path)
        if b"\x00" in upath:
            raise Pebkac(400, "null byte in path")

        segs, slash = sanitize_vpath(upath)
        uri = b"/" + b"/".join(segs)
        if segs and slash:
            uri += b"/"

        fspath = os.path.join(bpath(self.hsrv.root), *segs)

        if uri.endswith(b"/"):
            self.tx_listing(uri, fspath, send_body)
            return

        try:
            st = os.stat(fspath)
        except OSError as ex:
            raise oserr2pebkac(ex, "file not found")

        if stat.S_ISDIR(st.st_mode):
            loc = escape_uri(uri + b"/").decode("ascii")
            self.send_response(301)
            self.send_header("Location", loc)
            self.send_header("Content-Length", "0")
            self.end_headers()
            return

        if not stat.S_ISREG(st.st_mode):
            raise NotFound("not a regular file")

        self.tx_file(fspath, st, send_body)

    def tx_listing(self, uri: bytes, fspath: bytes, send_body: bool) -> None:
        hsrv = self.hsrv
        conf = hsrv.merger.resolve(fsdec(uri))
        if not conf.enable:
            raise AccessDenied("directory listing is disabled here")

        req = ListingRequest(fspath, uri, hsrv.utf8, conf)
        res = build_listing(req, hsrv.fs, hsrv.tpl, hsrv.clock, self.log)

        mode = conf.include_mode or INCLUDE_STATIC
        header = hsrv.includes.get(conf.header or "", mode)
        footer = hsrv.includes.get(conf.footer or "", mode)
        body = header + res.body + footer

        mime = res.mime + "; charset=utf-8"
        self.reply(body, res.status, mime, send_body)

    def tx_file(self, fspath: bytes, st: os.stat_result, send_body: bool) -> None:
        mime = mimetypes.guess_type(fsdec(fspath))[0] or "application/octet-stream"
        try:
            f = open(fspath, "rb")
        except OSError as ex:
            raise oserr2pebkac(ex, "cannot open file")

        with f:
            self.send_response(200)
            self.send_header("Content-Type", mime)
            self.send_header("Content-Length", str(st.st_size))
            self.send_header("Last-Modified", formatdate(st.st_mtime))
            self.end_headers()
            if send_body:
                shutil.copyfileobj(f, self.wfile)

    def reply(
        self,
        body: bytes,
        status: int = 200,
        mime: str = "text/html; charset=utf-8",
        send_body: bool = True,
        headers: Union[dict[str, str], None] = None,
    ) -> None:
        self.send_response(status)
        self.send_header("Content-Type", mime)
        self.send_header("Content-Length", str(len(body)))
        for k, v in (headers or {}).items():
            self.send_header(k, v)
        self.end_headers()
        if send_body:
            self.wfile.write(body)

    def reply_err(
        self,
        status: int,
        msg: str,
        send_body: bool,
        headers: Union[dict[str, str], None] = None,
    ) -> None:
        if self.sent_headers:
            # too late for an error page; cut the response short instead
            self.log("response already started; closing connection", 3)
            self.close_connection = True
            return

        body = ("<pre>%s\n" % (html_escape(msg),)).encode("utf-8", "replace")
        self.reply(body, status, "text/html; charset=utf-8", send_body, headers)
