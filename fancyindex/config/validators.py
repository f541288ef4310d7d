"""Configuration validators for fancyindex.

Validates merged location configs:
- readme names (plain file names only)
- readme presentation flags (only iframe is rendered)
- header / footer paths
"""

import os
from typing import Callable, Dict

from .model import README_IFRAME, ListingConfig, fmt_readme_flags


class ConfigValidator:
    """Validate merged location configs."""

    def __init__(self, log_func: Callable[[str, int], None]):
        """Initialize validator with logging function.

        Args:
            log_func: Function for logging messages (msg, level)
        """
        self.log = log_func

    def validate_readme_name(self, loc: str, conf: ListingConfig) -> bool:
        """Check that the readme is a file name rather than a path.

        Returns:
            True if validation passed, False otherwise (will log error)
        """
        name = conf.readme or b""
        if b"/" in name or b"\\" in name or name in (b".", b".."):
            msg = "location %s: fancyindex_readme must be a plain file name, not %r"
            self.log(msg % (loc, name), 1)
            return False

        # the listing hides dotfiles, so the readme must not be one
        if name.startswith(b"."):
            msg = "location %s: fancyindex_readme must not be a hidden file, not %r"
            self.log(msg % (loc, name), 1)
            return False

        return True

    def validate_readme_flags(self, loc: str, conf: ListingConfig) -> bool:
        """Warn about readme flags which the listing cannot render.

        Only the iframe presentation is implemented; div/pre/asis are
        accepted but the readme is left out of the page.

        Returns:
            True if the readme will be shown (or none is configured)
        """
        if not conf.readme or conf.has_readme_flag(README_IFRAME):
            return True

        flags = conf.readme_flags or 0
        msg = "location %s: bad readme_flags combination %#x (%s); the readme will not be shown, add iframe"
        self.log(msg % (loc, flags, fmt_readme_flags(flags)), 3)
        return False

    def validate_includes(self, loc: str, conf: ListingConfig) -> bool:
        """Warn about header / footer files which do not exist.

        Returns:
            True if all configured files exist
        """
        ok = True
        for k in ("header", "footer"):
            fp = getattr(conf, k)
            if fp and not os.path.isfile(fp):
                self.log("location %s: fancyindex_%s %r not found" % (loc, k, fp), 3)
                ok = False

        return ok

    def validate_all(self, merged: Dict[str, ListingConfig]) -> bool:
        """Run all checks on every location.

        Returns:
            False if any location has a fatal problem (bad readme name)
        """
        ok = True
        for loc, conf in sorted(merged.items()):
            if not self.validate_readme_name(loc, conf):
                ok = False
            self.validate_readme_flags(loc, conf)
            self.validate_includes(loc, conf)

        return ok
