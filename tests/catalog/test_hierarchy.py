"""Tests for the category hierarchy builder."""

import pytest

from storefront.catalog.hierarchy import (
    CategoryRecord,
    CategoryTree,
    build_category_tree,
    expand_descendant_ids,
    parse_taxonomy,
)


@pytest.fixture
def records() -> list[CategoryRecord]:
    """Clothing > (Shirts > Polos, Pants), Shoes."""
    return [
        CategoryRecord(id="clothing", name="Clothing"),
        CategoryRecord(id="shirts", name="Shirts", parent_category_id="clothing"),
        CategoryRecord(id="pants", name="Pants", parent_category_id="clothing"),
        CategoryRecord(id="polos", name="Polos", parent_category_id="shirts"),
        CategoryRecord(id="shoes", name="Shoes"),
    ]


class TestBuildCategoryTree:
    """Tests for turning flat records into a forest."""

    def test_empty_input(self) -> None:
        """No records gives an empty forest."""
        assert build_category_tree([]) == []

    def test_roots_in_input_order(self, records: list[CategoryRecord]) -> None:
        """Top-level categories keep their input order."""
        forest = build_category_tree(records)
        assert [node.id for node in forest] == ["clothing", "shoes"]

    def test_children_nested(self, records: list[CategoryRecord]) -> None:
        """Children hang under their parent, in input order."""
        clothing = build_category_tree(records)[0]
        assert [child.id for child in clothing.children] == ["shirts", "pants"]
        assert [child.id for child in clothing.children[0].children] == ["polos"]
        assert clothing.children[1].children == []

    def test_child_before_parent(self) -> None:
        """Input order does not need parents first."""
        forest = build_category_tree(
            [
                CategoryRecord(id="b", name="B", parent_category_id="a"),
                CategoryRecord(id="a", name="A"),
            ]
        )
        assert [node.id for node in forest] == ["a"]
        assert [child.id for child in forest[0].children] == ["b"]

    def test_orphan_becomes_root(self) -> None:
        """A category pointing at an unknown parent is shown at top level."""
        forest = build_category_tree(
            [
                CategoryRecord(id="a", name="A"),
                CategoryRecord(id="b", name="B", parent_category_id="deleted"),
            ]
        )
        assert [node.id for node in forest] == ["a", "b"]

    def test_every_record_appears_once(self, records: list[CategoryRecord]) -> None:
        """Each category shows up exactly once in the forest."""
        seen = [node.id for root in build_category_tree(records) for node in root.walk()]
        assert sorted(seen) == sorted(r.id for r in records)

    def test_children_point_at_their_parent(self, records: list[CategoryRecord]) -> None:
        for root in build_category_tree(records):
            assert root.parent_category_id is None
            for node in root.walk():
                for child in node.children:
                    assert child.parent_category_id == node.id

    def test_walk_is_depth_first(self, records: list[CategoryRecord]) -> None:
        """walk() visits a node, then its subtrees in order."""
        clothing = build_category_tree(records)[0]
        assert [node.id for node in clothing.walk()] == ["clothing", "shirts", "polos", "pants"]

    def test_cycle_terminates(self) -> None:
        """Records on a parent cycle are left out instead of looping."""
        forest = build_category_tree(
            [
                CategoryRecord(id="root", name="Root"),
                CategoryRecord(id="x", name="X", parent_category_id="y"),
                CategoryRecord(id="y", name="Y", parent_category_id="x"),
            ]
        )
        assert [node.id for node in forest] == ["root"]
        assert forest[0].children == []


class TestCategoryTree:
    """Tests for CategoryTree lookups."""

    def test_len_and_contains(self, records: list[CategoryRecord]) -> None:
        tree = CategoryTree(records)
        assert len(tree) == 5
        assert "polos" in tree
        assert "hats" not in tree

    def test_get(self, records: list[CategoryRecord]) -> None:
        tree = CategoryTree(records)
        assert tree.get("pants").name == "Pants"
        assert tree.get("missing") is None

    def test_children_of_unknown(self, records: list[CategoryRecord]) -> None:
        """Unknown IDs have no children."""
        assert CategoryTree(records).children_of("missing") == []

    def test_descendants_include_self(self, records: list[CategoryRecord]) -> None:
        """A category expands to itself plus its whole subtree."""
        tree = CategoryTree(records)
        assert tree.descendant_ids("clothing") == {"clothing", "shirts", "pants", "polos"}
        assert tree.descendant_ids("shirts") == {"shirts", "polos"}

    def test_leaf_descendants(self, records: list[CategoryRecord]) -> None:
        """A leaf expands to itself only."""
        assert CategoryTree(records).descendant_ids("shoes") == {"shoes"}

    def test_unknown_descendants_empty(self, records: list[CategoryRecord]) -> None:
        """An unknown category expands to nothing."""
        assert expand_descendant_ids(records, "missing") == set()

    def test_descendants_on_cycle_terminate(self) -> None:
        """Expansion of a cyclic parent chain stops."""
        records = [
            CategoryRecord(id="x", name="X", parent_category_id="y"),
            CategoryRecord(id="y", name="Y", parent_category_id="x"),
        ]
        assert expand_descendant_ids(records, "x") == {"x", "y"}


class TestParseTaxonomy:
    """Tests for the taxonomy text parser."""

    def test_parse_lines(self) -> None:
        """Paths are resolved into parent IDs."""
        records = parse_taxonomy(
            [
                "537 - Electronics",
                "264 - Electronics > Audio",
                "3622 - Electronics > Audio > Headphones",
            ]
        )
        assert records == [
            CategoryRecord(id="537", name="Electronics"),
            CategoryRecord(id="264", name="Audio", parent_category_id="537"),
            CategoryRecord(id="3622", name="Headphones", parent_category_id="264"),
        ]

    def test_skips_blank_comment_and_malformed(self) -> None:
        records = parse_taxonomy(["", "# Google taxonomy", "no separator", "1 - Toys"])
        assert [r.id for r in records] == ["1"]

    def test_undeclared_parent_path(self) -> None:
        """A line whose parent path was never declared has no parent."""
        records = parse_taxonomy(["9 - Garden > Tools"])
        assert records[0].parent_category_id is None
        assert [node.id for node in build_category_tree(records)] == ["9"]
