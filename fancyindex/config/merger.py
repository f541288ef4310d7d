"""Location config merging for fancyindex.

Each location inherits whatever it leaves unset from the closest
enclosing location, and "/" from the defaults.
"""

from typing import Callable, Dict, Optional

from .model import ListingConfig
from .parsers import norm_location


class ConfigMerger:
    """Resolve request paths to merged configs."""

    def __init__(
        self,
        locs: Dict[str, ListingConfig],
        log_func: Optional[Callable[[str, int], None]] = None,
    ):
        """Merge all locations up-front.

        Args:
            locs: Unmerged configs keyed by location
            log_func: Function for logging messages (msg, level)
        """
        self.log = log_func or (lambda msg, c=0: None)
        self.locs = dict(locs)
        if "/" not in self.locs:
            self.locs["/"] = ListingConfig()

        self.merged: Dict[str, ListingConfig] = {}
        for loc in sorted(self.locs, key=len):
            parent = self._parent(loc)
            base = self.merged[parent] if parent else None
            self.merged[loc] = self.locs[loc].merge(base)
            self.log("location %s: %r" % (loc, self.merged[loc]), 6)

    def _parent(self, loc: str) -> Optional[str]:
        best = None
        for zs in self.merged:
            if zs != loc and loc.startswith(zs):
                if best is None or len(zs) > len(best):
                    best = zs
        return best

    def location(self, vpath: str) -> str:
        """Longest configured location containing vpath."""
        vpath = norm_location(vpath)
        best = "/"
        for loc in self.locs:
            if vpath.startswith(loc) and len(loc) > len(best):
                best = loc
        return best

    def resolve(self, vpath: str) -> ListingConfig:
        return self.merged[self.location(vpath)]
