"""Unit tests for the Nix binding extractor.

Tests verify ACTUAL behavior on real Nix snippets: which bindings are found,
where their position points, and which comment (if any) is attached.
"""

import pytest

from nixdoc.indexer.extractors import BaseExtractor, ExtractorRegistry
from nixdoc.indexer.extractors.nix import NixExtractor, extract_bindings, find_doc_comment
from nixdoc.indexer.scanner import EventKind, scan
from nixdoc.models import SourcePosition


def bindings_of(source, path="t.nix"):
    return extract_bindings(scan(source), source, path)


# ============================================================================
# Binding detection
# ============================================================================

class TestBindingDetection:
    """Which assignments become Binding records."""

    def test_curried_binding(self, add_source):
        """A curried lambda becomes one binding positioned at its first parameter."""
        (binding,) = bindings_of(add_source)

        assert binding.name == "add"
        assert binding.signature_snippet == "add = a: b: ..."
        assert binding.position == SourcePosition("t.nix", 2, 7)

    def test_position_is_first_lambda_head(self):
        """The position points at the first lambda head."""
        (binding,) = bindings_of("  foo = first: second: third: body;")
        # column of `first`, not of `foo`, `=` or a later parameter
        assert (binding.position.line, binding.position.column) == (1, 9)

    def test_plain_value_is_not_a_binding(self):
        """Non-function values produce no binding."""
        source = '# The version.\nversion = "1.0";\n'
        assert bindings_of(source) == []

    def test_application_is_not_a_binding(self):
        """A function application is not a function definition."""
        assert bindings_of("f = g x;\n") == []

    def test_pattern_lambda_signature(self):
        """Pattern-set heads are kept whole in the signature."""
        (binding,) = bindings_of("mkThing = { name, version ? \"1\", ... }: name;")
        assert binding.signature_snippet == 'mkThing = { name, version ? "1", ... }: ...'

    def test_multiline_signature_collapses_whitespace(self):
        """Whitespace runs in a multi-line head collapse to one space."""
        source = "f =\n  { a\n  , b\n  }:\n  x:\n  a + b + x;\n"
        (binding,) = bindings_of(source)

        assert binding.signature_snippet == "f = { a , b }: x: ..."
        assert (binding.position.line, binding.position.column) == (2, 3)

    def test_attribute_path_name(self):
        """Dotted attribute paths are the binding name."""
        (binding,) = bindings_of("lib.strings.trim = s: s;")
        assert binding.name == "lib.strings.trim"
        assert binding.signature_snippet == "lib.strings.trim = s: ..."

    def test_bindings_in_source_order(self):
        """Bindings come back in source order."""
        source = "{\n  a = x: x;\n  b = 1;\n  c = y: y;\n}\n"
        names = [b.name for b in bindings_of(source)]
        assert names == ["a", "c"]

    def test_lambda_in_string_is_not_a_binding(self):
        """Lambda-looking text inside a string is ignored."""
        source = 'msg = "use f = x: x here";\n'
        assert bindings_of(source) == []

    def test_duplicate_names_kept(self):
        """Two definitions of one name are both reported."""
        source = "# One.\nf = x: x;\n# Two.\nf = y: y;\n"
        bindings = bindings_of(source)
        assert [b.name for b in bindings] == ["f", "f"]
        assert [b.position.line for b in bindings] == [2, 4]


# ============================================================================
# Comment adjacency
# ============================================================================

class TestDocComment:
    """The adjacency rule for attaching a comment to a binding."""

    def test_adjacent_line_comment(self, add_source):
        """A line comment directly above documents the binding."""
        (binding,) = bindings_of(add_source)

        assert binding.doc is not None
        assert binding.doc.lines == ("# Adds two numbers.",)
        assert binding.doc.style == "line"
        assert binding.doc.position == SourcePosition("t.nix", 1, 1)

    def test_blank_line_breaks_adjacency(self):
        """A blank line detaches the comment."""
        (binding,) = bindings_of("# Adds two numbers.\n\nadd = a: b: a + b;\n")
        assert binding.doc is None

    def test_trailing_comment_never_documents(self):
        """A comment after code on its line documents nothing."""
        source = "x = 1; # not documentation\nf = a: a;\n"
        binding = bindings_of(source)[0]
        assert binding.name == "f"
        assert binding.doc is None

    def test_token_between_comment_and_binding(self):
        """Any token between comment and binding detaches it."""
        source = "# Doc.\nx = 1;\nf = a: a;\n"
        (binding,) = bindings_of(source)
        assert binding.doc is None

    def test_consecutive_line_comments_merge(self):
        """Adjacent line comments merge into one doc comment."""
        source = "# First line.\n#   indented\n# Last line.\nf = a: a;\n"
        (binding,) = bindings_of(source)

        assert binding.doc.lines == ("# First line.", "#   indented", "# Last line.")
        assert binding.doc.position.line == 1
        assert binding.doc.end_line == 3

    def test_merge_stops_at_blank_line(self):
        """Merging stops at a blank line."""
        source = "# Unrelated.\n\n# Doc.\nf = a: a;\n"
        (binding,) = bindings_of(source)
        assert binding.doc.lines == ("# Doc.",)

    def test_merge_stops_at_trailing_comment(self):
        """Merging stops at a trailing comment."""
        source = "x = 1; # trailing\n# Doc.\nf = a: a;\n"
        (binding,) = bindings_of(source)
        assert binding.doc.lines == ("# Doc.",)

    def test_block_comment_used_alone(self):
        """A block comment is never merged with line comments above it."""
        source = "# Line.\n/* Block. */\nf = a: a;\n"
        (binding,) = bindings_of(source)

        assert binding.doc.style == "block"
        assert binding.doc.lines == ("/* Block. */",)

    def test_line_comments_do_not_merge_into_block(self):
        """Line comments below a block comment stand alone."""
        source = "/* Block. */\n# Line.\nf = a: a;\n"
        (binding,) = bindings_of(source)

        assert binding.doc.style == "line"
        assert binding.doc.lines == ("# Line.",)

    def test_block_comment_on_binding_line(self):
        """A block comment before the name on its line documents it."""
        (binding,) = bindings_of("/* Identity. */ f = a: a;\n")
        assert binding.doc.lines == ("/* Identity. */",)

    def test_indented_binding_in_attribute_set(self):
        """Comments inside an attribute set keep their column."""
        source = "{\n  # Doc.\n  f = a: a;\n}\n"
        (binding,) = bindings_of(source)
        assert binding.doc.lines == ("# Doc.",)
        assert binding.doc.position.column == 3

    def test_find_doc_comment_at_start(self):
        """A binding at the start of the file has no comment."""
        events = scan("f = a: a;")
        assert events[0].kind is EventKind.IDENTIFIER
        assert find_doc_comment(events, 0, "t.nix") is None


# ============================================================================
# Extractor and registry
# ============================================================================

class TestNixExtractor:
    """NixExtractor plugged into the ExtractorRegistry."""

    def test_extract_records_given_path(self, add_source):
        """The path in the file info ends up in each position."""
        extractor = NixExtractor()
        result = extractor.extract({"path": "lib/arith.nix"}, add_source)

        (binding,) = result["bindings"]
        assert binding.position.file_path == "lib/arith.nix"

    def test_registry_discovers_nix_extractor(self):
        """The registry finds NixExtractor for .nix files."""
        registry = ExtractorRegistry()

        assert registry.supported_extensions() == [".nix"]
        assert isinstance(registry.get_extractor("lib/default.nix"), NixExtractor)
        assert isinstance(registry.get_extractor("lib/default.nix"), BaseExtractor)

    @pytest.mark.parametrize("name", ["setup.py", "default.nix.bak", "nix"])
    def test_registry_rejects_other_files(self, name):
        """Files without the .nix suffix get no extractor."""
        assert ExtractorRegistry().get_extractor(name) is None
