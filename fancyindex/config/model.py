"""Listing configuration for one location.

Values are None while unset; ListingConfig.merge fills them in from the
parent location, falling back to the defaults below.
"""

from typing import Optional

README_ASIS = 0x01
README_BOTTOM = 0x02
README_DIV = 0x04
README_IFRAME = 0x08
README_TOP = 0x10
README_PRE = 0x20

README_KEYWORDS = {
    "pre": README_PRE,
    "asis": README_ASIS,
    "top": README_TOP,
    "bottom": README_BOTTOM,
    "div": README_DIV,
    "iframe": README_IFRAME,
}

INCLUDE_STATIC = "static"
INCLUDE_CACHED = "cached"
INCLUDE_MODES = (INCLUDE_STATIC, INCLUDE_CACHED)

DEFAULTS = {
    "enable": False,
    "localtime": False,
    "exact_size": True,
    "header": "",
    "footer": "",
    "readme": b"",
    "readme_flags": README_TOP | README_PRE,
    "include_mode": INCLUDE_STATIC,
}


def readme_placements(flags: int) -> list[int]:
    """Where the readme goes; top unless told otherwise."""
    ret = [x for x in (README_TOP, README_BOTTOM) if flags & x]
    return ret or [README_TOP]


def fmt_readme_flags(flags: int) -> str:
    return " ".join(k for k, v in README_KEYWORDS.items() if flags & v)


class ListingConfig(object):
    KEYS = tuple(DEFAULTS)

    def __init__(
        self,
        enable: Optional[bool] = None,
        localtime: Optional[bool] = None,
        exact_size: Optional[bool] = None,
        header: Optional[str] = None,
        footer: Optional[str] = None,
        readme: Optional[bytes] = None,
        readme_flags: Optional[int] = None,
        include_mode: Optional[str] = None,
    ) -> None:
        self.enable = enable
        self.localtime = localtime
        self.exact_size = exact_size
        self.header = header
        self.footer = footer
        self.readme = readme
        self.readme_flags = readme_flags
        self.include_mode = include_mode

    def __repr__(self) -> str:
        zs = ", ".join(
            "%s=%r" % (k, getattr(self, k))
            for k in self.KEYS
            if getattr(self, k) is not None
        )
        return "ListingConfig(%s)" % (zs,)

    def merge(self, parent: Optional["ListingConfig"] = None) -> "ListingConfig":
        """Return a new config with unset values taken from parent, then defaults."""
        ret = ListingConfig()
        for k in self.KEYS:
            v = getattr(self, k)
            if v is None and parent is not None:
                v = getattr(parent, k)
            if v is None:
                v = DEFAULTS[k]
            setattr(ret, k, v)
        return ret

    def has_readme_flag(self, flag: int) -> bool:
        return bool((self.readme_flags or 0) & flag)
