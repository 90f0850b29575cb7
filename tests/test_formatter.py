"""Tests for the plain-text report format."""

from nixdoc.formatter import SEPARATOR_WIDTH, indented, render, render_report, separator


class TestRender:
    """Single-entry blocks."""

    def test_block_layout(self, make_entry):
        """Doc text, signature and location line, in that order."""
        assert render(make_entry()) == (
            "   Adds two numbers.\n"
            "add = a: b: ...\n"
            "# lib/arith.nix:2"
        )

    def test_multiline_doc(self, make_entry):
        """Every doc line is indented, the blank one included."""
        entry = make_entry(text="Maps f.\n\nExample:\n  map g xs")
        assert render(entry).split("\n")[:4] == [
            "   Maps f.",
            "   ",
            "   Example:",
            "     map g xs",
        ]

    def test_custom_indent(self, make_entry):
        """indent=0 leaves doc lines flush left."""
        assert render(make_entry(), indent=0).startswith("Adds two numbers.\n")

    def test_location_uses_line_not_column(self, make_entry):
        """The location line carries the line number only."""
        assert render(make_entry(line=40, column=12)).endswith("# lib/arith.nix:40")

    def test_indented_prefixes_blank_lines(self):
        """Blank lines get the prefix like any other line."""
        assert indented("a\n\nb", 2) == "  a\n  \n  b"


class TestRenderReport:
    """Multi-entry reports."""

    def test_separator(self):
        """The default separator is 45 box-drawing characters."""
        assert separator() == "─" * 45
        assert len(separator()) == SEPARATOR_WIDTH

    def test_entries_separated_not_terminated(self, make_entry):
        """Separators go between entries, never after the last one."""
        first = make_entry()
        second = make_entry(text="Other.", name="sub", signature="sub = a: b: ...", line=9)

        report = render_report([first, second])

        assert report == render(first) + "\n" + "─" * 45 + "\n" + render(second)
        assert not report.endswith("─")

    def test_single_entry_has_no_separator(self, make_entry):
        """One entry renders as its block alone."""
        assert render_report([make_entry()]) == render(make_entry())

    def test_empty(self):
        """No entries renders as the empty string."""
        assert render_report([]) == ""

    def test_order_preserved(self, make_entry):
        """Entries appear in the order given."""
        entries = [make_entry(name=n, signature=f"{n} = x: ...") for n in ("z", "a", "m")]
        report = render_report(entries)
        positions = [report.index(f"{n} = x: ...") for n in ("z", "a", "m")]
        assert positions == sorted(positions)

    def test_custom_separator_width(self, make_entry):
        """separator_width sets the separator length."""
        report = render_report([make_entry(), make_entry()], separator_width=10)
        assert "\n" + "─" * 10 + "\n" in report
        assert "─" * 11 not in report
