"""Tests for PositionLookup and its consistency with tree search."""

import pytest

from nixdoc.formatter import render
from nixdoc.lookup import PositionLookup
from nixdoc.models import SourcePosition
from nixdoc.search import collect_entries, search_text

SOURCE = """\
{
  # Adds two numbers.
  add = a: b: a + b;

  undocumented = x: x;

  # Subtracts.
  sub = a: b: a - b; mul = a: b: a * b;
}
"""


@pytest.fixture
def tree(nix_tree):
    return nix_tree({"lib/arith.nix": SOURCE, "pkgs/other.nix": "# Other.\nother = p: p;\n"})


class TestLookup:
    """Keyed access by position."""

    def test_consistent_with_search(self, tree):
        """Every searched entry is found again by its position."""
        index = PositionLookup.from_result(collect_entries(tree))

        for entry in search_text("", tree):
            found = index.lookup(entry.position)
            assert found == entry
            assert render(found) == render(entry)

    def test_tuple_keys(self, tree):
        """Keys may be (path, line, column) or (path, line) tuples."""
        index = PositionLookup.from_tree(tree)
        path = str(tree / "lib" / "arith.nix")

        assert index.lookup((path, 3, 9)).binding_name == "add"
        assert index.lookup((path, 3)).binding_name == "add"
        assert index.lookup((path, 3, 3)) is None

    def test_undocumented_binding_not_found(self, tree):
        """Undocumented bindings are not indexed."""
        index = PositionLookup.from_tree(tree)
        assert index.lookup((str(tree / "lib" / "arith.nix"), 5, 18)) is None

    def test_line_lookup_returns_first_on_line(self, tree):
        """A line lookup returns the first entry on that line."""
        index = PositionLookup.from_tree(tree)
        path = tree / "lib" / "arith.nix"

        assert index.lookup_line(path, 8).binding_name == "sub"

    def test_relative_and_absolute_paths_agree(self, tree, monkeypatch):
        """Relative and absolute paths name the same entry."""
        monkeypatch.chdir(tree)
        index = PositionLookup.from_tree(".")
        (entry,) = search_text("^other$", ".", names_only=True).entries

        assert entry.position.file_path == "pkgs/other.nix"
        assert index.lookup(SourcePosition(str(tree / "pkgs" / "other.nix"), 2, 9)) == entry

    def test_for_file(self, tree):
        """for_file indexes a single file."""
        index = PositionLookup.for_file(tree / "lib" / "arith.nix")

        assert len(index) == 2
        assert (str(tree / "lib" / "arith.nix"), 8, 9) in index
        assert (str(tree / "pkgs" / "other.nix"), 2, 9) not in index

    def test_contains_rejects_other_types(self, tree):
        """String keys are never contained."""
        assert "lib/arith.nix:3" not in PositionLookup.from_tree(tree)

    def test_bad_key(self):
        """A tuple without a line raises ValueError."""
        with pytest.raises(ValueError):
            PositionLookup().lookup(("only-a-file",))

    def test_add(self, make_entry):
        """Entries added by hand can be looked up."""
        index = PositionLookup()
        entry = make_entry()
        index.add(entry)

        assert index.lookup(entry.position) == entry
        assert len(index) == 1
