# coding: utf-8
import platform
import sys

WINDOWS = platform.system() == "Windows"

VT100 = not WINDOWS or sys.getwindowsversion()[2] > 16280  # type: ignore

from .__version__ import S_VERSION as __version__  # noqa: E402,F401
