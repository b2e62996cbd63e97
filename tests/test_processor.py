import unittest

from glslinclude.processor import GLSLSourceProcessor
from glslinclude.provider import MemorySourceProvider
from glslinclude.types import SourceKind


def make_processor(sources, includes=None, **kwargs):
    messages = []
    provider = MemorySourceProvider(sources, includes)
    proc = GLSLSourceProcessor(provider, log=messages.append, **kwargs)
    return proc, messages


class TestPreamble(unittest.TestCase):
    def test_version_and_define(self):
        proc, _ = make_processor({"main.frag": "void main(){}"})
        proc.define("LIGHT_COUNT", "4")
        self.assertEqual(
            proc.get_shader_source("main.frag"),
            "#version 450 core\n#define LIGHT_COUNT 4\nvoid main(){}\n",
        )

    def test_no_includes_keeps_lines(self):
        proc, _ = make_processor({"a": "line1\nline2"}, glsl_version="#version 330")
        proc.define("A", 1)
        proc.define("B")
        self.assertEqual(
            proc.get_shader_source("a"),
            "#version 330\n#define A 1\n#define B \nline1\nline2\n",
        )

    def test_trailing_newline_gives_empty_line(self):
        proc, _ = make_processor({"a": "x\n"})
        self.assertEqual(proc.get_shader_source("a"), "#version 450 core\nx\n\n")

    def test_carriage_returns_pass_through(self):
        proc, _ = make_processor({"a": "x\r\ny"})
        self.assertEqual(proc.get_shader_source("a"), "#version 450 core\nx\r\ny\n")

    def test_undef_all_matches_fresh_table(self):
        fresh, _ = make_processor({"a": "void main(){}"})
        proc, _ = make_processor({"a": "void main(){}"})
        proc.define("X", 2)
        proc.define("Y")
        proc.undef_all()
        self.assertEqual(proc.get_shader_source("a"), fresh.get_shader_source("a"))

    def test_undef_single(self):
        proc, _ = make_processor({"a": "body"})
        proc.define("X", 2)
        proc.define("Y", 3)
        proc.undef("X")
        proc.undef("MISSING")
        self.assertEqual(proc.get_shader_source("a"), "#version 450 core\n#define Y 3\nbody\n")

    def test_defines_persist_between_calls(self):
        proc, _ = make_processor({"a": "body"})
        proc.define("X", 1.5)
        first = proc.get_shader_source("a")
        second = proc.get_shader_source("a")
        self.assertEqual(first, second)
        self.assertIn("#define X 1.5\n", first)

    def test_preamble_only_once_with_includes(self):
        proc, _ = make_processor({"a": '#include "b"\nmain', "b": "lib"})
        proc.define("X", 1)
        out = proc.get_shader_source("a")
        self.assertEqual(out.count("#version"), 1)
        self.assertEqual(out.count("#define X"), 1)


class TestIncludes(unittest.TestCase):
    def test_include_expanded_in_place(self):
        proc, _ = make_processor({
            "a": 'top\n#include "b"\nbottom',
            "b": "lib1\nlib2",
        })
        self.assertEqual(
            proc.get_shader_source("a"),
            "#version 450 core\ntop\nlib1\nlib2\nbottom\n",
        )

    def test_duplicate_include_emitted_once(self):
        proc, _ = make_processor({
            "a": '#include "b"\nmiddle\n#include "b"\nend',
            "b": "B",
        })
        self.assertEqual(proc.get_shader_source("a"), "#version 450 core\nB\nmiddle\nend\n")

    def test_shared_include_across_branches(self):
        # a -> b, c ; b -> common ; c -> common
        proc, _ = make_processor({
            "a": '#include "b"\n#include "c"',
            "b": '#include "common"\nB',
            "c": '#include "common"\nC',
            "common": "COMMON",
        })
        out = proc.get_shader_source("a")
        self.assertEqual(out, "#version 450 core\nCOMMON\nB\nC\n")

    def test_nested_includes(self):
        proc, _ = make_processor({
            "a": '#include "b"\nA',
            "b": '#include "c"\nB',
            "c": "C",
        })
        self.assertEqual(proc.get_shader_source("a"), "#version 450 core\nC\nB\nA\n")

    def test_include_uses_include_kind(self):
        proc, _ = make_processor(
            {"a": '#include "lib"', "lib": "WRONG"},
            {"lib": "RIGHT"},
        )
        self.assertEqual(proc.get_shader_source("a"), "#version 450 core\nRIGHT\n")

    def test_text_outside_quotes_ignored(self):
        proc, _ = make_processor({"a": '#include "b" // helpers', "b": "B"})
        self.assertEqual(proc.get_shader_source("a"), "#version 450 core\nB\n")

    def test_first_and_next_quote_delimit_name(self):
        proc, _ = make_processor({"a": '#include "b" // see "notes"', "b": "B"})
        self.assertEqual(proc.get_shader_source("a"), "#version 450 core\nB\n")

    def test_indented_include_is_plain_text(self):
        proc, _ = make_processor({"a": '  #include "b"'})
        self.assertEqual(proc.get_shader_source("a"), '#version 450 core\n  #include "b"\n')

    def test_expansion_state_not_shared_between_calls(self):
        proc, _ = make_processor({"a": '#include "b"', "b": "B"})
        self.assertEqual(proc.get_shader_source("a"), proc.get_shader_source("a"))
        self.assertIn("B\n", proc.get_shader_source("a"))

    def test_include_of_top_level_expands_once_more(self):
        proc, _ = make_processor({"a": '#include "b"\nA', "b": '#include "a"\nB'})
        self.assertEqual(proc.get_shader_source("a"), "#version 450 core\nA\nB\nA\n")

    def test_guard_top_level_skips_self_include(self):
        proc, _ = make_processor({"a": '#include "b"\nA', "b": '#include "a"\nB'}, guard_top_level=True)
        self.assertEqual(proc.get_shader_source("a"), "#version 450 core\nB\nA\n")


class TestFailures(unittest.TestCase):
    def test_missing_top_level(self):
        proc, messages = make_processor({})
        self.assertIsNone(proc.get_shader_source("nope"))
        self.assertEqual(messages, ["Failed to load shader source: nope"])

    def test_missing_include(self):
        proc, messages = make_processor({"a": '#include "missing"'})
        self.assertIsNone(proc.get_shader_source("a"))
        self.assertIn("Failed to include file: missing", messages)

    def test_missing_include_deep_in_tree(self):
        proc, _ = make_processor({
            "a": 'A\n#include "b"',
            "b": '#include "c"',
            "c": 'C\n#include "d"',
        })
        self.assertIsNone(proc.get_shader_source("a"))

    def test_include_without_quotes(self):
        proc, messages = make_processor({"a": "#include B.glsl", "B.glsl": "B"})
        self.assertIsNone(proc.get_shader_source("a"))
        self.assertEqual(len(messages), 1)
        self.assertIn("#include B.glsl", messages[0])

    def test_include_missing_closing_quote(self):
        proc, messages = make_processor({"a": '#include "b', "b": "B"})
        self.assertIsNone(proc.get_shader_source("a"))
        self.assertTrue(messages[0].startswith("Missing closing"))

    def test_malformed_include_in_nested_file(self):
        proc, _ = make_processor({"a": '#include "b"', "b": "#include <c>"})
        self.assertIsNone(proc.get_shader_source("a"))

    def test_failing_log_sink_does_not_change_result(self):
        def broken(message):
            raise RuntimeError("sink down")

        provider = MemorySourceProvider({"a": '#include "b"', "b": "B"})
        proc = GLSLSourceProcessor(provider, log=broken)
        self.assertEqual(proc.get_shader_source("a"), "#version 450 core\nB\n")
        self.assertIsNone(proc.get_shader_source("missing"))

    def test_provider_added_later(self):
        provider = MemorySourceProvider({"a": '#include "b"'})
        proc = GLSLSourceProcessor(provider)
        self.assertIsNone(proc.get_shader_source("a"))
        provider.add(SourceKind.INCLUDE, "b", "B")
        self.assertEqual(proc.get_shader_source("a"), "#version 450 core\nB\n")


if __name__ == "__main__":
    unittest.main()
