"""Zoom renderer behavior: collapse runs, comment blocks, and level bounds."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from codezoom.zoom import (
    FULL_DETAIL_ZOOM,
    ZoomState,
    detect_indent_unit,
    indentation_columns,
    line_depth,
    render_zoom,
    render_zoom_for_path,
    zoom_line,
)

SAMPLE = (
    'import x from "y";\n'
    "\n"
    "/**\n"
    " * Doc.\n"
    " */\n"
    "export class Foo {\n"
    "  private a = 1;\n"
    "\n"
    "  bar(): number {\n"
    "    if (this.a) {\n"
    "      return 2;\n"
    "    }\n"
    "    return 3;\n"
    "  }\n"
    "}\n"
    "\n"
    "function baz() {\n"
    "  return 4;\n"
    "}\n"
)


class IndentationTests(unittest.TestCase):
    def test_indentation_columns_expands_tabs(self) -> None:
        self.assertEqual(indentation_columns("\t  x", tab_width=4), 6)
        self.assertEqual(indentation_columns("\tx", tab_width=2), 2)
        self.assertEqual(indentation_columns("x"), 0)

    def test_detect_indent_unit_ignores_comment_interiors(self) -> None:
        lines = ["/**", " * one column in", " */", "a {", "  b", "}"]
        self.assertEqual(detect_indent_unit(lines), 2)

    def test_detect_indent_unit_falls_back_to_tab_width_for_flat_text(self) -> None:
        self.assertEqual(detect_indent_unit(["a", "b"], tab_width=8), 8)

    def test_line_depth_counts_partial_units_as_a_level(self) -> None:
        self.assertEqual(line_depth("   x", unit=2), 2)
        self.assertEqual(line_depth("  x", unit=2), 1)
        self.assertEqual(line_depth("x", unit=2), 0)


class RenderZoomTests(unittest.TestCase):
    def test_level_one_collapses_function_body(self) -> None:
        content = "function foo() {\n  return 1;\n}\n"
        self.assertEqual(render_zoom(content, 1, tab_width=4), "function foo() {\n  ...\n}")

    def test_zero_and_negative_levels_hide_everything(self) -> None:
        for level in (0, -1, -10):
            self.assertEqual(render_zoom(SAMPLE, level), "")
        self.assertEqual(render_zoom("", 0), "")

    def test_full_detail_returns_stripped_content(self) -> None:
        self.assertEqual(render_zoom(SAMPLE, FULL_DETAIL_ZOOM), SAMPLE.strip())
        self.assertEqual(render_zoom("\n  x\n\n", FULL_DETAIL_ZOOM + 5), "x")

    def test_level_one_of_sample(self) -> None:
        expected = (
            'import x from "y";\n'
            "/**\n"
            " * Doc.\n"
            " */\n"
            "export class Foo {\n"
            "  ...\n"
            "}\n"
            "function baz() {\n"
            "  ...\n"
            "}"
        )
        self.assertEqual(render_zoom(SAMPLE, 1), expected)

    def test_level_two_of_sample(self) -> None:
        expected = (
            'import x from "y";\n'
            "/**\n"
            " * Doc.\n"
            " */\n"
            "export class Foo {\n"
            "  private a = 1;\n"
            "  bar(): number {\n"
            "    ...\n"
            "  }\n"
            "}\n"
            "function baz() {\n"
            "  return 4;\n"
            "}"
        )
        self.assertEqual(render_zoom(SAMPLE, 2), expected)

    def test_blank_lines_do_not_break_a_collapse_run(self) -> None:
        self.assertEqual(render_zoom("a {\n  b\n\n  c\n}\n", 1), "a {\n  ...\n}")

    def test_nested_comment_is_kept_and_restarts_the_run(self) -> None:
        content = "class A {\n  /** doc */\n  method() {\n    return 1;\n  }\n}\n"
        self.assertEqual(render_zoom(content, 1), "class A {\n  /** doc */\n  ...\n}")
        self.assertEqual(
            render_zoom(content, 2),
            "class A {\n  /** doc */\n  method() {\n    ...\n  }\n}",
        )

    def test_block_comment_is_copied_verbatim_including_blank_lines(self) -> None:
        content = "a {\n      /*\n\n         deep\n   */\n  b\n}\n"
        self.assertEqual(
            render_zoom(content, 1),
            "a {\n      /*\n\n         deep\n   */\n  ...\n}",
        )

    def test_unterminated_comment_runs_to_end_of_text(self) -> None:
        self.assertEqual(render_zoom("top\n/* open\n      deep\n", 1), "top\n/* open\n      deep")

    def test_tab_indented_source(self) -> None:
        content = "def f():\n\tif x:\n\t\treturn 1\n"
        self.assertEqual(render_zoom(content, 1, tab_width=4), "def f():\n    ...")
        self.assertEqual(render_zoom(content, 2, tab_width=4), "def f():\n\tif x:\n        ...")

    def test_windows_line_endings_are_normalized(self) -> None:
        self.assertEqual(render_zoom("a {\r\n  b\r\n}\r\n", 1), "a {\n  ...\n}")

    def test_state_does_not_leak_between_calls(self) -> None:
        render_zoom("a {\n  b", 1)
        self.assertEqual(render_zoom("  x\ny", 1), "...\ny")
        render_zoom("/* open\n  deep", 1)
        self.assertEqual(render_zoom("top\n  deep", 1), "top\n  ...")

    def test_line_count_grows_with_zoom_level(self) -> None:
        counts = [len(render_zoom(SAMPLE, level).splitlines()) for level in range(0, FULL_DETAIL_ZOOM + 2)]
        self.assertEqual(counts, sorted(counts))
        self.assertEqual(counts[0], 0)

    def test_rendering_is_idempotent_at_a_fixed_level(self) -> None:
        for level in range(0, FULL_DETAIL_ZOOM + 1):
            once = render_zoom(SAMPLE, level)
            self.assertEqual(render_zoom(once, level), once, msg=f"level {level}")

    def test_rejects_non_positive_tab_width(self) -> None:
        with self.assertRaises(ValueError):
            render_zoom("x", 1, tab_width=0)


class ZoomLineTests(unittest.TestCase):
    def test_zoom_line_emits_one_marker_per_run(self) -> None:
        state = ZoomState()
        self.assertEqual(zoom_line("a {", 1, 2, state), "a {")
        self.assertEqual(zoom_line("  b", 1, 2, state), "  ...")
        self.assertTrue(state.in_collapsed_run)
        self.assertIsNone(zoom_line("  c", 1, 2, state))
        self.assertIsNone(zoom_line("", 1, 2, state))
        self.assertTrue(state.in_collapsed_run)
        self.assertEqual(zoom_line("}", 1, 2, state), "}")
        self.assertFalse(state.in_collapsed_run)

    def test_zoom_line_tracks_comment_blocks(self) -> None:
        state = ZoomState()
        self.assertEqual(zoom_line("/*", 1, 2, state), "/*")
        self.assertTrue(state.in_comment_block)
        self.assertEqual(zoom_line("        deep", 1, 2, state), "        deep")
        self.assertEqual(zoom_line(" */", 1, 2, state), " */")
        self.assertFalse(state.in_comment_block)


class RenderZoomForPathTests(unittest.TestCase):
    def test_reads_file_and_renders(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "main.ts"
            path.write_text("function foo() {\n  return 1;\n}\n", encoding="utf-8")
            self.assertEqual(render_zoom_for_path(path, 1), "function foo() {\n  ...\n}")

    def test_zoom_zero_does_not_touch_the_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            self.assertEqual(render_zoom_for_path(Path(tmp) / "missing.ts", 0), "")


if __name__ == "__main__":
    unittest.main()
