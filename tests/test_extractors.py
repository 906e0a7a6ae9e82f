import textwrap
from pathlib import Path

import pytest

from code_duplicate_detector.languages import (
    GenericExtractor,
    JavaExtractor,
    JavaScriptExtractor,
    PythonExtractor,
    detect_language,
    extensions_for_project_types,
    get_extractor,
    register_extractor,
)


FILE = Path("/project/src/sample.js")


def _source(text):
    return textwrap.dedent(text).lstrip("\n")


def _ranges(blocks, block_type=None):
    return [
        (b.start_line, b.end_line)
        for b in blocks
        if block_type is None or b.block_type == block_type
    ]


ADD_FUNCTION = _source("""
    // helper
    function add(a, b) {
      const sum = a + b;
      if (sum > 10) {
        return 10;
      }
      return sum;
    }

    const x = 1;
""")

INDENT_RUNS = _source("""
        alpha = 1
        beta = 2
            gamma = 3
        delta = 4
        epsilon = 5
    zeta = 6
    eta = 7
    theta = 8
    iota = 9
    kappa = 10
""")


class TestBraceFunctionScan:
    def test_function_block_spans_header_to_closing_brace(self):
        blocks = GenericExtractor().extract(ADD_FUNCTION, FILE, "generic")

        function_blocks = [b for b in blocks if b.block_type == "function"]
        assert _ranges(function_blocks) == [(2, 8)]
        assert function_blocks[0].content.splitlines()[0] == "function add(a, b) {"
        assert function_blocks[0].content.splitlines()[-1] == "}"

    def test_function_blocks_come_before_indent_blocks(self):
        blocks = GenericExtractor().extract(ADD_FUNCTION, FILE, "generic")

        assert [b.block_type for b in blocks] == ["function", "indent"]
        assert _ranges(blocks) == [(2, 8), (2, 10)]

    def test_short_function_is_not_a_block(self):
        content = "function a() {\n  return 1;\n}\n"

        assert GenericExtractor().extract(content, FILE, "generic", min_block_size=5) == []

    def test_unbalanced_braces_never_emit_a_function(self):
        content = _source("""
            function broken() {
              if (x) {
                doSomething();
              return 1;
              still();
              more();
        """)

        blocks = GenericExtractor().extract(content, FILE, "generic")

        assert _ranges(blocks, "function") == []
        assert _ranges(blocks, "indent") == [(1, 6)]

    def test_comment_lines_are_not_content(self):
        content = _source("""
            function add(a, b) {
              // add them
              const sum = a + b;
              /* clamp */
              if (sum > 10) {
                return 10;
              }
              return sum;
            }
        """)

        blocks = GenericExtractor().extract(content, FILE, "generic")
        function_block = blocks[0]

        assert (function_block.start_line, function_block.end_line) == (1, 9)
        assert "add them" not in function_block.content
        assert "clamp" not in function_block.content

    def test_generic_misses_assigned_arrow_but_javascript_finds_it(self):
        content = _source("""
            const handler = async (req, res) => {
              const body = req.body;
              if (!body) {
                return res.end();
              }
              res.send(body);
            };
        """)

        generic = GenericExtractor().extract(content, FILE, "javascript")
        javascript = JavaScriptExtractor().extract(content, FILE, "javascript")

        assert _ranges(generic, "function") == []
        assert _ranges(javascript, "function") == [(1, 7)]

    def test_identical_ranges_are_emitted_once(self):
        content = _source("""
            function total(items) {
              let sum = 0;
              for (const item of items) {
                sum += item.price;
              }
              return sum;
            }
        """)

        blocks = GenericExtractor().extract(content, FILE, "generic")

        assert len(blocks) == 1
        assert blocks[0].block_type == "function"
        assert _ranges(blocks) == [(1, 7)]


class TestIndentationScan:
    def test_dedent_below_starting_level_starts_a_new_run(self):
        blocks = GenericExtractor().extract(INDENT_RUNS, FILE, "generic")

        assert _ranges(blocks, "indent") == [(1, 5), (6, 10)]
        assert blocks[0].content.splitlines() == [
            "alpha = 1", "beta = 2", "gamma = 3", "delta = 4", "epsilon = 5",
        ]

    def test_minimum_size_drops_short_runs(self):
        assert GenericExtractor().extract(INDENT_RUNS, FILE, "generic", min_block_size=6) == []

    def test_blank_and_comment_lines_keep_line_numbers(self):
        content = _source("""
                alpha = 1

                // note
                beta = 2
                gamma = 3
                delta = 4
                epsilon = 5
            zeta = 6
        """)

        blocks = GenericExtractor().extract(content, FILE, "generic")

        assert _ranges(blocks) == [(1, 7)]
        assert "note" not in blocks[0].content

    def test_empty_content_has_no_blocks(self):
        assert GenericExtractor().extract("", FILE, "generic") == []


@pytest.mark.parametrize("min_block_size", [1, 2, 3, 5, 8])
def test_every_block_meets_minimum_size(min_block_size):
    content = ADD_FUNCTION + INDENT_RUNS

    blocks = JavaScriptExtractor().extract(content, FILE, "javascript", min_block_size)

    assert blocks
    for block in blocks:
        assert len(block.content.splitlines()) >= min_block_size
        assert 1 <= block.start_line <= block.end_line <= len(content.splitlines())


class TestPythonExtractor:
    def test_function_ends_at_last_body_line(self):
        content = _source("""
            import os


            def load(path):
                with open(path) as fh:
                    data = fh.read()
                if not data:
                    return None
                return data.strip()


            x = 1
        """)

        blocks = PythonExtractor().extract(content, Path("loader.py"), "python")

        assert _ranges(blocks, "function") == [(4, 9)]
        assert _ranges(blocks, "indent") == [(1, 12)]

    def test_function_open_at_end_of_file_is_closed(self):
        content = _source("""
            class Cart:
                def __init__(self):
                    self.items = []

                def add(self, item):
                    self.items.append(item)
        """)

        blocks = PythonExtractor().extract(content, Path("cart.py"), "python")

        assert _ranges(blocks) == [(1, 6)]
        assert blocks[0].block_type == "function"


class TestJavaExtractor:
    def test_method_body_is_extracted(self):
        content = _source("""
            public class Orders {
                public int total(List<Item> items) {
                    int sum = 0;
                    for (Item item : items) {
                        sum += item.price;
                    }
                    return sum;
                }
            }
        """)

        blocks = JavaExtractor().extract(content, Path("Orders.java"), "java")

        assert _ranges(blocks, "function") == [(2, 8)]

    def test_control_statements_do_not_start_a_method(self):
        extractor = JavaExtractor()

        assert not extractor.is_function_start("for (Item item : items) {")
        assert not extractor.is_function_start("if (ready) {")
        assert extractor.is_function_start("private static String name(int id) throws IOException {")
        assert extractor.is_function_start("public OrderService(Repository repo) {")


class TestRegistry:
    def test_known_languages(self):
        assert isinstance(get_extractor("python"), PythonExtractor)
        assert isinstance(get_extractor("TypeScript"), JavaScriptExtractor)
        assert isinstance(get_extractor("java"), JavaExtractor)

    def test_unknown_language_falls_back_to_generic(self):
        assert isinstance(get_extractor("ruby"), GenericExtractor)
        assert isinstance(get_extractor(None), GenericExtractor)

    def test_register_extractor(self):
        register_extractor("coffeescript", JavaScriptExtractor)

        assert isinstance(get_extractor("coffeescript"), JavaScriptExtractor)

    def test_detect_language(self):
        assert detect_language(Path("App.TSX")) == "typescript"
        assert detect_language(Path("main.py")) == "python"
        assert detect_language(Path("README.md")) is None

    @pytest.mark.parametrize("project_types, expected", [
        (None, [".js", ".jsx"]),
        ([], [".js", ".jsx"]),
        (["typescript"], [".js", ".jsx", ".ts", ".tsx"]),
        (["python"], [".py"]),
        (["rust"], []),
        (["generic", "python"], [".js", ".jsx", ".py"]),
        (["javascript", "typescript"], [".js", ".jsx", ".ts", ".tsx"]),
    ])
    def test_extensions_for_project_types(self, project_types, expected):
        assert extensions_for_project_types(project_types) == expected
