# coding: utf-8
"""The static parts of the listing page.

The page template is rendered through jinja2 once, at startup, with a
sentinel wherever the listing inserts something; splitting on the
sentinel gives the fixed fragments the renderer glues together.
"""
from __future__ import annotations

import os
from typing import Optional

import jinja2

from .__version__ import S_VERSION

WEB_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "web")

CUT = "\x00"

# in page order; the renderer inserts its parts between these
FRAGMENTS = (
    "head1",  # ...<title>
    "head2",
    "body1",  # ...<h1>
    "body2",
    "list1",  # ...<tbody>
    "list2",
    "body3",
    "body4",
    "foot1",
)


class Templates(object):
    def __init__(
        self,
        tpl_dir: Optional[str] = None,
        name: str = "fancyindex.html",
        title: str = "Index of ",
        css: str = "",
    ) -> None:
        self.tpl_dir = tpl_dir or WEB_DIR
        self.name = name

        j2env = jinja2.Environment(keep_trailing_newline=True)
        j2env.loader = jinja2.FileSystemLoader(self.tpl_dir)
        tpl = j2env.get_template(name)

        ka = {
            "cut": CUT,
            "charset": "utf-8",
            "version": S_VERSION,
            "title": title,
            "css": css,
        }
        txt = tpl.render(**ka)

        parts = txt.encode("utf-8").split(CUT.encode("ascii"))
        if len(parts) != len(FRAGMENTS):
            t = "template %r has %d insertion points; need exactly %d"
            raise ValueError(t % (name, len(parts) - 1, len(FRAGMENTS) - 1))

        self.frags: dict[str, bytes] = dict(zip(FRAGMENTS, parts))
        self.size = sum(len(x) for x in parts)

    def __getattr__(self, name: str) -> bytes:
        try:
            return self.__dict__["frags"][name]
        except KeyError:
            raise AttributeError(name)
