from __future__ import annotations

import unittest

from script_classifier import Script, classify_char, count_latin, count_persian, has_latin_letter, is_rtl_text


class ClassifyCharTests(unittest.TestCase):
    def test_persian_block_boundaries(self):
        for code in (0x0600, 0x06FF, 0x0750, 0x077F, 0xFB50, 0xFDFF, 0xFE70, 0xFEFF):
            with self.subTest(code=hex(code)):
                self.assertIs(classify_char(chr(code)), Script.PERSIAN)

    def test_just_outside_ranges_is_other(self):
        for code in (0x05FF, 0x0700, 0x074F, 0x0780, 0xFB4F, 0xFE00, 0xFE6F, 0xFF00):
            with self.subTest(code=hex(code)):
                self.assertIs(classify_char(chr(code)), Script.OTHER)

    def test_persian_letters_and_punctuation(self):
        for ch in "سلامپچژگ،؟":
            self.assertIs(classify_char(ch), Script.PERSIAN)

    def test_latin_digits_space_and_punctuation_are_other(self):
        for ch in "aZ09 .,!\t-":
            self.assertIs(classify_char(ch), Script.OTHER)


class DirectionCountTests(unittest.TestCase):
    def test_counts(self):
        self.assertEqual(count_persian("سلام world"), 4)
        self.assertEqual(count_latin("سلام world 42"), 7)

    def test_persian_majority_is_rtl(self):
        self.assertTrue(is_rtl_text("سلام دنیا hi"))

    def test_latin_majority_is_ltr(self):
        self.assertFalse(is_rtl_text("hello world سلام"))

    def test_tie_and_empty_go_rtl(self):
        self.assertTrue(is_rtl_text("ab سل"))
        self.assertTrue(is_rtl_text(""))

    def test_has_latin_letter(self):
        self.assertTrue(has_latin_letter("x2"))
        self.assertFalse(has_latin_letter("2024 -"))


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
