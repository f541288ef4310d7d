"""Time utilities for fancyindex.

Handles the listing's timestamp format and the timezone offset, which is
injected as a Clock so nothing reads the host zone behind the caller's back.
"""

import time
from typing import Optional

MONTHS = "Jan Feb Mar Apr May Jun Jul Aug Sep Oct Nov Dec".split()
RFC2822 = "%s, %02d %s %04d %02d:%02d:%02d GMT"
WKDAYS = "Mon Tue Wed Thu Fri Sat Sun".split()

LISTING_FMT = "%02d-%s-%d %02d:%02d"

# 9999-12-31 23:59:59 UTC
MAX_TS = 253402300799


class Clock(object):
    """Source of the local timezone offset, in minutes east of UTC."""

    def gmtoff(self) -> int:
        raise NotImplementedError()


class LocalClock(Clock):
    """Offset of the host's zone at the time of the call (dst included)."""

    def gmtoff(self) -> int:
        return time.localtime().tm_gmtoff // 60


class FixedClock(Clock):
    def __init__(self, minutes: int = 0) -> None:
        self.minutes = minutes

    def gmtoff(self) -> int:
        return self.minutes


def formatdate(ts: Optional[float] = None) -> str:
    # gmtime ~= datetime.fromtimestamp(ts, UTC).timetuple()
    y, mo, d, h, mi, s, wd, _, _ = time.gmtime(ts)
    return RFC2822 % (WKDAYS[wd], d, MONTHS[mo - 1], y, h, mi, s)


def fmt_listing_date(mtime: int, gmtoff: int, localtime: bool) -> bytes:
    """Format a modification time as DD-Mon-YYYY HH:MM.

    Args:
        mtime: Seconds since epoch
        gmtoff: Zone offset in minutes
        localtime: Apply the offset; otherwise the time is shown in UTC

    Returns:
        Formatted date as ascii bytes
    """
    ts = mtime + gmtoff * 60 * int(bool(localtime))
    ts = min(max(0, ts), MAX_TS)
    y, mo, d, h, mi, _, _, _, _ = time.gmtime(ts)
    return (LISTING_FMT % (d, MONTHS[mo - 1], y, h, mi)).encode("ascii")
