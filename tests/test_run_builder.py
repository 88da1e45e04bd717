from __future__ import annotations

import unittest

from document_model import LRM, RLM, Direction, DirectionTable, ScriptProfile
from markup_scanner import Literal, scan_line
from run_builder import BuilderState, build_runs, runs_from_line, step
from script_classifier import Script

SAMPLE_LINES = [
    "سلام دنیا",
    "سلام world",
    "Hello سلام and **bold متن** here",
    "E = mc^2 و H_{2}O",
    "a **b** c **d",
    "**",
    "مدل deep learning و transformer",
]


def _adjacent_runs_are_distinct(runs):
    for left, right in zip(runs, runs[1:]):
        if left.superscript or left.subscript or right.superscript or right.subscript:
            continue
        if left.signature == right.signature:
            return False
    return True


class ScriptSwitchTests(unittest.TestCase):
    def test_persian_only_line_is_one_rtl_run(self):
        runs = runs_from_line("سلام دنیا")
        self.assertEqual(len(runs), 1)
        self.assertEqual(runs[0].text, "سلام دنیا")
        self.assertIs(runs[0].script, Script.PERSIAN)
        self.assertIs(runs[0].direction, Direction.RTL)
        self.assertEqual(runs[0].mark, RLM)

    def test_one_switch_gives_two_marked_runs(self):
        runs = runs_from_line("سلام world")
        self.assertEqual([r.text for r in runs], ["سلام ", "world"])
        self.assertEqual([r.direction for r in runs], [Direction.RTL, Direction.LTR])
        self.assertTrue(runs[0].marked_text.startswith(RLM))
        self.assertTrue(runs[1].marked_text.startswith(LRM))

    def test_whitespace_stays_with_latin_run(self):
        runs = runs_from_line("Hello سلام")
        self.assertEqual([r.text for r in runs], ["Hello ", "سلام"])
        self.assertIs(runs[0].script, Script.OTHER)

    def test_digits_are_other_script(self):
        runs = runs_from_line("سال 1402")
        self.assertEqual([r.text for r in runs], ["سال ", "1402"])
        self.assertIs(runs[1].script, Script.OTHER)

    def test_empty_line_has_no_runs(self):
        self.assertEqual(runs_from_line(""), ())


class BoldTests(unittest.TestCase):
    def test_even_toggles_end_plain(self):
        runs = runs_from_line("a **b** c")
        self.assertEqual([(r.text, r.bold) for r in runs], [("a ", False), ("b", True), (" c", False)])

    def test_odd_toggle_stays_bold_to_end_of_line(self):
        runs = runs_from_line("a **b")
        self.assertEqual([(r.text, r.bold) for r in runs], [("a ", False), ("b", True)])

    def test_bold_does_not_leak_across_lines(self):
        runs_from_line("a **b")
        runs = runs_from_line("c")
        self.assertFalse(runs[0].bold)

    def test_force_bold_ignores_toggles(self):
        runs = runs_from_line("a **b** c", force_bold=True)
        self.assertEqual(len(runs), 1)
        self.assertEqual(runs[0].text, "a b c")
        self.assertTrue(runs[0].bold)

    def test_lone_toggle_emits_nothing(self):
        self.assertEqual(runs_from_line("**"), ())


class ScriptedSpanTests(unittest.TestCase):
    def test_superscript_run(self):
        runs = runs_from_line("x^2 y")
        self.assertEqual([r.text for r in runs], ["x", "2", " y"])
        self.assertTrue(runs[1].superscript)
        self.assertFalse(runs[1].subscript)
        self.assertFalse(runs[0].superscript or runs[2].superscript)

    def test_subscript_run(self):
        runs = runs_from_line("H_{2}O")
        self.assertEqual([r.text for r in runs], ["H", "2", "O"])
        self.assertTrue(runs[1].subscript)

    def test_span_script_comes_from_first_character(self):
        runs = runs_from_line("x^{دو}")
        self.assertIs(runs[1].script, Script.PERSIAN)
        self.assertEqual(runs[1].mark, RLM)

    def test_span_keeps_bold_state(self):
        runs = runs_from_line("**x^2**")
        self.assertTrue(all(r.bold for r in runs))
        self.assertTrue(runs[1].superscript)

    def test_span_does_not_change_active_script(self):
        # The space after the Persian span still belongs to the Latin run
        runs = runs_from_line("a^{ب} c")
        self.assertEqual([r.text for r in runs], ["a", "ب", " c"])
        self.assertIs(runs[2].script, Script.OTHER)


class InvariantTests(unittest.TestCase):
    def test_runs_are_maximal(self):
        for line in SAMPLE_LINES:
            with self.subTest(line=line):
                self.assertTrue(_adjacent_runs_are_distinct(runs_from_line(line)))

    def test_run_text_reproduces_line_without_markup(self):
        runs = runs_from_line("سلام **world** x^{2} و H_2O")
        self.assertEqual("".join(r.text for r in runs), "سلام world x2 و H2O")

    def test_marks_are_not_part_of_text(self):
        for line in SAMPLE_LINES:
            for run in runs_from_line(line):
                self.assertNotIn(LRM, run.text)
                self.assertNotIn(RLM, run.text)


class FoldTests(unittest.TestCase):
    def test_step_returns_new_state(self):
        state = BuilderState()
        new_state = step(state, Literal("ab"))
        self.assertEqual(state.buffer, "")
        self.assertEqual(new_state.buffer, "ab")
        self.assertIs(new_state.active_script, Script.OTHER)

    def test_unknown_token_raises(self):
        with self.assertRaises(TypeError):
            step(BuilderState(), object())

    def test_custom_direction_table(self):
        table = DirectionTable({
            Script.PERSIAN: ScriptProfile(Direction.RTL, ""),
            Script.OTHER: ScriptProfile(Direction.LTR, ""),
        })
        runs = build_runs(scan_line("سلام world"), table)
        self.assertEqual([r.marked_text for r in runs], ["سلام ", "world"])

    def test_incomplete_direction_table_is_rejected(self):
        with self.assertRaises(ValueError):
            DirectionTable({Script.PERSIAN: ScriptProfile(Direction.RTL, RLM)})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
