"""Unit tests for the listing renderer and the size estimator."""

import unittest
from unittest.mock import MagicMock

from fancyindex.config.model import (
    README_BOTTOM,
    README_IFRAME,
    README_PRE,
    README_TOP,
    ListingConfig,
)
from fancyindex.services.collector import DirEntry
from fancyindex.services.estimator import entry_size, estimate_size, readme_size
from fancyindex.services.renderer import OutBuf, n_readmes, render_listing
from fancyindex.services.sorter import sort_entries
from fancyindex.templates import Templates
from fancyindex.time_util import MAX_TS
from fancyindex.util import ServerFault
from tests.util import T0, FakeTemplates

IFRAME = b'<iframe id="readme" src="/d/README.html">(readme file)</iframe>\r\n'

ODD_NAMES = [
    b"a",
    b"x" * 300,
    b"&<>\"'",
    b"&" * 60,
    b"<" * 49,
    b"%20 %41?#",
    b"\xff\xfe\xfd" * 30,
    b"\x01\x02\x7f",
    ("日本語" * 25).encode("utf-8"),
    ("é" * 49).encode("utf-8"),
    "\U0001f600 smile".encode("utf-8"),
]


def mkconf(**ka):
    return ListingConfig(**ka).merge()


def mkents(utf8=True):
    ret = []
    for n, name in enumerate(ODD_NAMES):
        ret.append(DirEntry(name, n % 2 == 0, T0, 0, utf8))
        ret.append(DirEntry(name + b".f", False, MAX_TS * 2, 2 ** 62 + n, utf8))
        ret.append(DirEntry(b"s" + name, False, -5, 9999 + n * 12345, utf8))
    return sort_entries(ret)


def render(entries, conf, readme_ref=None, tpl=None, log=None, uri=b"/d/", gmtoff=0, utf8=True):
    tpl = tpl or FakeTemplates()
    nrm = n_readmes(conf.readme_flags)
    cap = estimate_size(tpl, uri, uri, readme_ref, nrm, entries)
    return render_listing(tpl, uri, uri, entries, conf, utf8, readme_ref, gmtoff, cap, log), cap


class TestOutBuf(unittest.TestCase):
    """Test the fixed-capacity buffer."""

    def test_fill(self) -> None:
        """Test writing up to exactly the capacity."""
        ob = OutBuf(6)
        ob.put(b"abc")
        ob.put(b"def")
        self.assertEqual(ob.getvalue(), b"abcdef")

    def test_overflow(self) -> None:
        """Test that writing past the end raises instead of growing."""
        ob = OutBuf(4)
        ob.put(b"abc")
        with self.assertRaises(ServerFault) as cm:
            ob.put(b"de")

        self.assertEqual(cm.exception.code, 500)
        self.assertEqual(ob.getvalue(), b"abc")

    def test_partial(self) -> None:
        """Test that only written bytes are returned."""
        ob = OutBuf(100)
        ob.put(b"x")
        self.assertEqual(ob.getvalue(), b"x")


class TestRenderer(unittest.TestCase):
    """Test the page layout."""

    def setUp(self) -> None:
        """Set up test fixtures."""
        self.log = MagicMock()
        self.ents = sort_entries(
            [
                DirEntry(b"report.txt", False, T0, 2048, True),
                DirEntry(b"images", True, T0, 0, True),
            ]
        )

    def test_layout(self) -> None:
        """Test the whole document for a small directory."""
        body, _ = render(self.ents, mkconf(exact_size=False))
        want = (
            b"<title>/d/</title><h1>/d/</h1>\n<table>\n"
            b'<tr class="e"><td><a href="images/">images/</a></td><td>-</td><td>04-Mar-2021 05:06</td></tr>\r\n'
            b'<tr class="o"><td><a href="report.txt">report.txt</a></td><td> 2048</td><td>04-Mar-2021 05:06</td></tr>\r\n'
            b"</table>\n</body></html>"
        )
        self.assertEqual(body, want)

    def test_exact_size(self) -> None:
        """Test the exact size column."""
        body, _ = render(self.ents, mkconf(exact_size=True))
        self.assertIn(b"<td>" + b"2048".rjust(19) + b"</td>", body)

    def test_localtime(self) -> None:
        """Test that the offset is applied only with localtime on."""
        body, _ = render(self.ents, mkconf(localtime=True), gmtoff=-120)
        self.assertIn(b"04-Mar-2021 03:06", body)

        body, _ = render(self.ents, mkconf(localtime=False), gmtoff=-120)
        self.assertIn(b"04-Mar-2021 05:06", body)

    def test_empty(self) -> None:
        """Test a directory without entries."""
        body, _ = render([], mkconf())
        self.assertEqual(body, b"<title>/d/</title><h1>/d/</h1>\n<table>\n</table>\n</body></html>")

    def test_readme_top(self) -> None:
        """Test an iframe above the table."""
        conf = mkconf(readme_flags=README_TOP | README_IFRAME)
        body, _ = render(self.ents, conf, b"README.html")
        self.assertEqual(body.count(IFRAME), 1)
        self.assertIn(b"</h1>\n" + IFRAME + b"<table>", body)

    def test_readme_bottom(self) -> None:
        """Test an iframe below the table."""
        conf = mkconf(readme_flags=README_BOTTOM | README_IFRAME)
        body, _ = render(self.ents, conf, b"README.html")
        self.assertEqual(body.count(IFRAME), 1)
        self.assertIn(b"</table>\n" + IFRAME + b"</body>", body)

    def test_readme_both(self) -> None:
        """Test an iframe at both ends."""
        conf = mkconf(readme_flags=README_TOP | README_BOTTOM | README_IFRAME)
        body, cap = render(self.ents, conf, b"README.html")
        self.assertEqual(body.count(IFRAME), 2)
        self.assertLessEqual(len(body), cap)

    def test_readme_default_placement(self) -> None:
        """Test that without top or bottom, the readme goes on top."""
        conf = mkconf(readme_flags=README_IFRAME)
        body, _ = render(self.ents, conf, b"README.html")
        self.assertIn(b"</h1>\n" + IFRAME + b"<table>", body)

    def test_readme_href_slash(self) -> None:
        """Test that the link gets a slash between the uri and the name."""
        conf = mkconf(readme_flags=README_IFRAME)
        body, _ = render(self.ents, conf, b"README.html", uri=b"/d")
        self.assertIn(IFRAME, body)

    def test_readme_missing(self) -> None:
        """Test that no iframe is emitted without a readme."""
        conf = mkconf(readme_flags=README_TOP | README_BOTTOM | README_IFRAME)
        body, _ = render(self.ents, conf, None, log=self.log)
        self.assertNotIn(b"iframe", body)
        self.log.assert_not_called()

    def test_readme_without_iframe(self) -> None:
        """Test that presentations other than iframe are skipped with a warning."""
        conf = mkconf(readme_flags=README_BOTTOM | README_PRE)
        body, _ = render(self.ents, conf, b"README.html", log=self.log)
        self.assertNotIn(b"iframe", body)
        self.log.assert_called_once_with("bad readme_flags combination 0x22", 3)

    def test_overflow(self) -> None:
        """Test that an undersized buffer is an error, never a truncated page."""
        with self.assertRaises(ServerFault):
            render_listing(FakeTemplates(), b"/", b"/", self.ents, mkconf(), True, None, 0, 40)

    def test_n_readmes(self) -> None:
        """Test how many iframes are planned."""
        self.assertEqual(n_readmes(README_TOP | README_PRE), 0)
        self.assertEqual(n_readmes(README_IFRAME), 1)
        self.assertEqual(n_readmes(README_TOP | README_IFRAME), 1)
        self.assertEqual(n_readmes(README_TOP | README_BOTTOM | README_IFRAME), 2)


class TestEstimator(unittest.TestCase):
    """Test that the estimate is an upper bound."""

    def test_bound_odd_names(self) -> None:
        """Test awkward names in every mode."""
        tpl = Templates()
        for utf8 in (True, False):
            ents = mkents(utf8)
            for exact in (True, False):
                for flags in (README_TOP | README_BOTTOM | README_IFRAME, README_PRE):
                    conf = mkconf(exact_size=exact, localtime=True, readme_flags=flags)
                    for uri in (b"/d/", b"/&<\xff \"'/"):
                        body, cap = render(
                            ents, conf, b"R%20.html", tpl, uri=uri, gmtoff=14 * 60, utf8=utf8
                        )
                        self.assertLessEqual(len(body), cap)

    def test_entry_size(self) -> None:
        """Test that each row fits its own allowance."""
        empty, base = render([], mkconf(exact_size=True))
        for ent in mkents():
            body, cap = render([ent], mkconf(exact_size=True))
            self.assertLessEqual(len(body) - len(empty), entry_size(ent))
            self.assertEqual(cap, base + entry_size(ent))

    def test_readme_counted_per_placement(self) -> None:
        """Test that two placements reserve room for two iframes."""
        tpl = FakeTemplates()
        one = estimate_size(tpl, b"/d/", b"/d/", b"R", 1, [])
        two = estimate_size(tpl, b"/d/", b"/d/", b"R", 2, [])
        self.assertEqual(two - one, readme_size(b"/d/", b"R"))
        self.assertEqual(estimate_size(tpl, b"/d/", b"/d/", None, 2, []), tpl.size + 6)


if __name__ == "__main__":
    unittest.main()
