"""Unit tests for escape-aware string helpers."""

import unittest

from ingest_io.text import index_with_esc, split_with_esc, unescape


class TestIndexWithEsc(unittest.TestCase):
    """Tests for index_with_esc."""

    def assert_index(self, s, delim, esc, expected):
        index = index_with_esc(s, delim, esc)
        self.assertEqual(index, expected)
        if expected >= 0:
            self.assertTrue(s[index:].startswith(delim))

    def test_delim_empty(self):
        self.assert_index("abc", "", "宇", 0)

    def test_esc_not_set(self):
        self.assert_index("abc", "bc", None, 1)

    def test_input_empty(self):
        self.assert_index("", "abc", "宙", -1)

    def test_input_shorter_than_delim(self):
        self.assert_index("a", "abc", "洪", -1)

    def test_input_equals_delim(self):
        self.assert_index("abc", "abc", "荒", 0)

    def test_esc_not_present(self):
        self.assert_index("мир во всем мире", "мире", "Ф", len("мир во всем "))

    def test_escaped_delim_skipped(self):
        self.assert_index("мир во всем /мире", "мире", "/", -1)

    def test_escaped_escape(self):
        self.assert_index("мир во всем ξξмире", "мире", "ξ", len("мир во всем ξξ"))

    def test_consecutive_escapes(self):
        self.assert_index("мир во вξξξξξсем ξξмире", "ире", "ξ", len("мир во вξξξξξсем ξξм"))

    def test_pipe_example(self):
        self.assert_index("abc%|efg|xyz", "|", "%", 8)

    def test_invalid_escape(self):
        with self.assertRaises(ValueError):
            index_with_esc("abc", "b", "%%")
        with self.assertRaises(ValueError):
            index_with_esc("abc", "b", "")


class TestSplitWithEsc(unittest.TestCase):
    """Tests for split_with_esc."""

    def test_delim_empty(self):
        self.assertEqual(split_with_esc("abc", "", "宇"), ["a", "b", "c"])

    def test_esc_not_set(self):
        self.assertEqual(split_with_esc("", "abc", None), [""])
        self.assertEqual(split_with_esc("a|b", "|", None), ["a", "b"])

    def test_delim_not_found(self):
        self.assertEqual(split_with_esc("?xyz", "xyz", "?"), ["?xyz"])

    def test_delim_found(self):
        self.assertEqual(split_with_esc("a*bc/*d*efg", "*", "/"), ["a", "bc/*d", "efg"])

    def test_input_empty(self):
        self.assertEqual(split_with_esc("", "*", "/"), [""])

    def test_trailing_delim(self):
        self.assertEqual(split_with_esc("a|b|", "|", "%"), ["a", "b", ""])

    def test_multi_char_delim(self):
        self.assertEqual(split_with_esc("a::b%::c::d", "::", "%"), ["a", "b%::c", "d"])


class TestUnescape(unittest.TestCase):
    """Tests for unescape."""

    def test_esc_not_set(self):
        self.assertEqual(unescape("abc", None), "abc")

    def test_input_empty(self):
        self.assertEqual(unescape("", "宇"), "")

    def test_escapes_removed(self):
        self.assertEqual(unescape("ξξabcξdξ", "ξ"), "ξabcd")

    def test_escaped_delimiter(self):
        self.assertEqual(unescape("abc%|efg", "%"), "abc|efg")

    def test_split_then_unescape(self):
        parts = [unescape(p, "/") for p in split_with_esc("a*bc/*d*efg", "*", "/")]
        self.assertEqual(parts, ["a", "bc*d", "efg"])


if __name__ == "__main__":
    unittest.main()
