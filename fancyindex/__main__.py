#!/usr/bin/env python3
# coding: utf-8
"""fancyindex: serve a directory with styled html listings

  python -m fancyindex -d /srv/pub -p 8080 --human-size --readme README.html
"""
from __future__ import annotations

import argparse
import os
import sys
from typing import Optional

from .__version__ import S_BUILD_DT, S_VERSION
from .config import ConfigMerger, ConfigValidator, DirectiveParser
from .httpsrv import HttpSrv
from .log_util import Logger
from .templates import Templates
from .util import min_ex


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="fancyindex",
        description="fancyindex v%s (%s)" % (S_VERSION, S_BUILD_DT),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    ap2 = ap.add_argument_group("server")
    ap2.add_argument("-d", metavar="DIR", type=str, default=".", help="directory to serve")
    ap2.add_argument("-i", metavar="IP", type=str, default="0.0.0.0", help="ip to bind")
    ap2.add_argument("-p", metavar="PORT", type=int, default=3923, help="port to bind")
    ap2.add_argument("-c", metavar="PATH", type=str, default="", help="location config file")
    ap2.add_argument("--no-utf8", action="store_true", help="measure names in bytes, not codepoints")
    ap2.add_argument("--no-index", action="store_true", help="disable listings in / (locations can reenable)")

    ap2 = ap.add_argument_group("listing")
    ap2.add_argument("--exact-size", dest="exact_size", action="store_const", const=True, default=None, help="show sizes in bytes (the default)")
    ap2.add_argument("--human-size", dest="exact_size", action="store_const", const=False, help="show sizes as 123K / 45M / 6G")
    ap2.add_argument("--localtime", action="store_const", const=True, default=None, help="show times in the server's zone instead of UTC")
    ap2.add_argument("--readme", metavar="NAME", type=str, default=None, help="embed this file (if it exists) in every listing")
    ap2.add_argument("--readme-options", metavar="KW", type=str, default=None, help="comma-separated: top, bottom, iframe, pre, asis, div")
    ap2.add_argument("--header", metavar="PATH", type=str, default=None, help="file to insert before the listing")
    ap2.add_argument("--footer", metavar="PATH", type=str, default=None, help="file to insert after the listing")
    ap2.add_argument("--mode", metavar="MODE", type=str, default=None, help="static: read header/footer once; cached: reread on change")

    ap2 = ap.add_argument_group("appearance")
    ap2.add_argument("--tpl-dir", metavar="DIR", type=str, default=None, help="directory with a custom fancyindex.html")
    ap2.add_argument("--title", metavar="TXT", type=str, default="Index of ", help="page title prefix")
    ap2.add_argument("--css", metavar="TXT", type=str, default="", help="extra css rules")

    ap2 = ap.add_argument_group("logging")
    ap2.add_argument("-v", action="store_true", help="verbose; include debug messages")
    ap2.add_argument("-q", action="store_true", help="quiet; only warnings and errors")
    ap2.add_argument("--no-color", action="store_true", help="no ansi colors in the log")
    return ap


def cli_directives(al: argparse.Namespace) -> list[tuple[str, list[str]]]:
    """the command-line options, as directives for location /"""
    ret = [("fancyindex", ["off"])] if al.no_index else []
    for k, v in [
        ("fancyindex_exact_size", al.exact_size),
        ("fancyindex_localtime", al.localtime),
    ]:
        if v is not None:
            ret.append((k, ["on" if v else "off"]))

    for k, v in [
        ("fancyindex_readme", al.readme),
        ("fancyindex_header", al.header),
        ("fancyindex_footer", al.footer),
        ("fancyindex_mode", al.mode),
    ]:
        if v is not None:
            ret.append((k, [v]))

    if al.readme_options is not None:
        ret.append(("fancyindex_readme_options", [al.readme_options]))

    return ret


def main(argv: Optional[list[str]] = None) -> int:
    al = build_argparser().parse_args(argv)
    log = Logger(al.v, al.q, colors=False if al.no_color else None)
    clog = log.named("config")

    root = os.path.abspath(al.d)
    if not os.path.isdir(root):
        log("root", "not a directory: %s" % (root,), 1)
        return 1

    parser = DirectiveParser(clog)
    try:
        locs = parser.parse_file(al.c) if al.c else parser.parse([])
        for k, v in cli_directives(al):
            parser.apply(locs["/"], k, v)

        # serving a directory implies listing it, unless told otherwise
        if locs["/"].enable is None:
            locs["/"].enable = True
    except Exception as ex:
        log("config", "bad config: %s" % (ex,), 1)
        return 1

    merger = ConfigMerger(locs, clog)
    if not ConfigValidator(clog).validate_all(merger.merged):
        return 1

    try:
        tpl = Templates(al.tpl_dir, title=al.title, css=al.css)
    except Exception:
        log("templates", "could not load the page template:\n" + min_ex(), 1)
        return 1

    hsrv = HttpSrv(root, merger, tpl, log, not al.no_utf8)
    try:
        hsrv.listen(al.i, al.p)
    except OSError as ex:
        log("httpsrv", "cannot listen on %s:%s: %s" % (al.i, al.p, ex), 1)
        return 1

    try:
        hsrv.serve_forever()
    except KeyboardInterrupt:
        log("root", "bye", 6)

    return 0


if __name__ == "__main__":
    sys.exit(main())
