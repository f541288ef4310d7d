"""Configuration parsers for fancyindex.

Extracts and parses:
- on/off flags (fancyindex, fancyindex_localtime, fancyindex_exact_size)
- readme options (fancyindex_readme_options top iframe)
- location config files ([/location/] sections of directives)
"""

import re
from typing import Callable, Dict, List

from ..util import fsenc
from .model import INCLUDE_MODES, README_KEYWORDS, ListingConfig

FLAG_VALUES = {"on": True, "off": False}

# the rest of the line is the value, spaces and "#" included
PATH_DIRECTIVES = ("fancyindex_header", "fancyindex_footer", "fancyindex_readme")


def parse_flag(directive: str, val: str) -> bool:
    try:
        return FLAG_VALUES[val.lower()]
    except KeyError:
        t = 'invalid value "%s" in "%s", it must be "on" or "off"'
        raise ValueError(t % (val, directive))


def norm_location(loc: str) -> str:
    """'/a/b' and 'a/b/' both become '/a/b/'"""
    loc = "/" + loc.strip().strip("/")
    return loc if loc == "/" else loc + "/"


class ReadmeOptionsParser:
    """Parse the keyword list of fancyindex_readme_options into a bitmask."""

    def __init__(self, log_func: Callable[[str, int], None]):
        """Initialize parser with logging function."""
        self.log = log_func

    def parse(self, words: List[str]) -> int:
        """
        Parse readme option keywords.

        Accepts space- or comma-separated keywords: pre, asis, top,
        bottom, div, iframe.

        Args:
            words: Keywords

        Returns:
            Bitmask of README_* flags

        Raises:
            ValueError: If a keyword is unknown
        """
        flags = 0
        for word in words:
            for kw in word.split(","):
                kw = kw.strip().lower()
                if not kw:
                    continue
                try:
                    bit = README_KEYWORDS[kw]
                except KeyError:
                    raise ValueError('invalid readme option "%s"' % (kw,))

                if flags & bit:
                    self.log('duplicate readme option "%s"' % (kw,), 3)

                flags |= bit

        return flags


class DirectiveParser:
    """Parse fancyindex directives into one ListingConfig per location."""

    RE_SECTION = re.compile(r"^\[(.*)\]$")

    def __init__(self, log_func: Callable[[str, int], None]):
        """Initialize parser with logging function."""
        self.log = log_func
        self.rop = ReadmeOptionsParser(log_func)

    def apply(self, conf: ListingConfig, directive: str, args: List[str]) -> None:
        """
        Apply one directive to a location config.

        Args:
            conf: Location config to update in-place
            directive: Directive name
            args: Directive arguments

        Raises:
            ValueError: If the directive is unknown or has bad arguments
        """
        if directive == "fancyindex_readme_options":
            if not args:
                raise ValueError("fancyindex_readme_options needs at least one option")
            conf.readme_flags = self.rop.parse(args)
            return

        if len(args) != 1:
            t = 'invalid number of arguments in "%s"'
            raise ValueError(t % (directive,))

        val = args[0]
        if directive == "fancyindex":
            conf.enable = parse_flag(directive, val)
        elif directive == "fancyindex_localtime":
            conf.localtime = parse_flag(directive, val)
        elif directive == "fancyindex_exact_size":
            conf.exact_size = parse_flag(directive, val)
        elif directive == "fancyindex_header":
            conf.header = val
        elif directive == "fancyindex_footer":
            conf.footer = val
        elif directive == "fancyindex_readme":
            conf.readme = fsenc(val)
        elif directive == "fancyindex_mode":
            if val not in INCLUDE_MODES:
                t = 'invalid value "%s" in "%s", it must be one of %s'
                raise ValueError(t % (val, directive, "/".join(INCLUDE_MODES)))
            conf.include_mode = val
        else:
            raise ValueError('unknown directive "%s"' % (directive,))

    def parse(self, lines: List[str], src: str = "<config>") -> Dict[str, ListingConfig]:
        """
        Parse a location config.

        Format:
            # comment, only at the start of a line
            fancyindex on;
            [/music/]
            fancyindex_readme README.html
            fancyindex_readme_options bottom iframe

        Directives before the first section apply to "/".

        Args:
            lines: Config file lines
            src: Name of the config, for error messages

        Returns:
            Dict mapping location -> unmerged ListingConfig

        Raises:
            Exception: If any line is invalid
        """
        ret: Dict[str, ListingConfig] = {"/": ListingConfig()}
        loc = "/"

        for lnum, ln in enumerate(lines, 1):
            # only whole-line comments; a "#" inside a value is kept
            ln = ln.strip()
            if not ln or ln.startswith("#"):
                continue

            m = self.RE_SECTION.match(ln)
            if m:
                loc = norm_location(m.group(1))
                if loc not in ret:
                    ret[loc] = ListingConfig()
                continue

            words = ln.rstrip(";").split()
            if words[0] in PATH_DIRECTIVES and len(words) > 2:
                words = [words[0], ln.rstrip(";").split(None, 1)[1].strip()]

            try:
                self.apply(ret[loc], words[0], words[1:])
            except (ValueError, IndexError) as e:
                msg = "%s:%d: %s" % (src, lnum, e)
                raise Exception(msg) from e

        return ret

    def parse_file(self, fp: str) -> Dict[str, ListingConfig]:
        with open(fp, "r", encoding="utf-8") as f:
            lines = f.read().split("\n")

        ret = self.parse(lines, fp)
        self.log("loaded %d location(s) from %s" % (len(ret), fp), 6)
        return ret
