"""Category hierarchy builder.

Categories are stored flat, each row pointing at its parent through
``parent_category_id``. This module turns such a flat list into a tree
and answers "which categories live under X" for search.

The tree is kept as an arena: records indexed by id plus explicit
child-id lists, so nodes never hold references to each other until
``to_forest`` materialises them.

Taxonomy text format accepted by ``parse_taxonomy``:
    1 - Apparel
    2 - Apparel > Shoes
    3 - Apparel > Shoes > Sneakers
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class CategoryRecord:
    """A flat category row.

    Attributes:
        id: Category ID.
        name: Display name.
        parent_category_id: Parent ID (None for a root).
    """

    id: str
    name: str
    parent_category_id: str | None = None

    @classmethod
    def from_model(cls, model: Any) -> "CategoryRecord":
        """Build a record from any object exposing the category columns."""
        return cls(
            id=model.id,
            name=model.name,
            parent_category_id=model.parent_category_id,
        )


@dataclass
class CategoryNode:
    """A category with its children attached."""

    id: str
    name: str
    parent_category_id: str | None = None
    children: list["CategoryNode"] = field(default_factory=list)

    def walk(self) -> Iterable["CategoryNode"]:
        """Yield this node and all descendants, depth first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))


class CategoryTree:
    """Parent/child index over a flat list of categories.

    A record whose parent is None, or whose parent id is not in the
    input, is a root. Roots and children keep the input order.

    Example usage:
        tree = CategoryTree(records)
        forest = tree.to_forest()
        ids = tree.descendant_ids("shoes")
    """

    def __init__(self, records: Iterable[CategoryRecord]) -> None:
        self._records: dict[str, CategoryRecord] = {}
        self._children: dict[str, list[str]] = {}
        self._root_ids: list[str] = []

        # First pass: index every record
        for record in records:
            self._records[record.id] = record
            self._children[record.id] = []

        # Second pass: link each record to its parent
        for record in self._records.values():
            parent_id = record.parent_category_id
            if parent_id is None or parent_id not in self._records:
                self._root_ids.append(record.id)
            else:
                self._children[parent_id].append(record.id)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, category_id: object) -> bool:
        return category_id in self._records

    def get(self, category_id: str) -> CategoryRecord | None:
        """Get a record by ID, or None if unknown."""
        return self._records.get(category_id)

    def roots(self) -> list[CategoryRecord]:
        """Get top-level categories, orphans included."""
        return [self._records[i] for i in self._root_ids]

    def children_of(self, category_id: str) -> list[CategoryRecord]:
        """Get direct children of a category.

        Args:
            category_id: Parent category ID.

        Returns:
            Direct children in input order; empty for unknown IDs.
        """
        return [self._records[i] for i in self._children.get(category_id, [])]

    def descendant_ids(self, category_id: str) -> set[str]:
        """Get a category ID plus every ID reachable through child links.

        Args:
            category_id: Category to expand.

        Returns:
            Set of IDs including ``category_id`` itself, or an empty set
            when the ID is unknown.
        """
        if category_id not in self._records:
            return set()

        visited: set[str] = set()
        stack = [category_id]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            stack.extend(self._children[current])
        return visited

    def to_forest(self) -> list[CategoryNode]:
        """Materialise the roots as nested ``CategoryNode`` trees.

        Records that sit on a parent cycle are unreachable from any root
        and do not appear in the forest.
        """
        nodes = {
            record.id: CategoryNode(
                id=record.id,
                name=record.name,
                parent_category_id=record.parent_category_id,
            )
            for record in self._records.values()
        }

        visited: set[str] = set()
        stack = list(self._root_ids)
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            for child_id in self._children[current]:
                if child_id not in visited:
                    nodes[current].children.append(nodes[child_id])
                    stack.append(child_id)

        return [nodes[i] for i in self._root_ids]


def build_category_tree(records: Iterable[CategoryRecord]) -> list[CategoryNode]:
    """Build a forest from flat category records.

    Args:
        records: Flat records in display order.

    Returns:
        Root nodes with children attached recursively.
    """
    return CategoryTree(records).to_forest()


def expand_descendant_ids(
    records: Iterable[CategoryRecord],
    category_id: str,
) -> set[str]:
    """Get ``category_id`` and all of its descendants.

    Args:
        records: Flat records of the whole catalog.
        category_id: Category to expand.

    Returns:
        Set of matching IDs; empty when ``category_id`` is unknown.
    """
    return CategoryTree(records).descendant_ids(category_id)


def parse_taxonomy(lines: Iterable[str]) -> list[CategoryRecord]:
    """Parse ``ID - A > B > C`` lines into flat records.

    Blank lines, comments and malformed lines are skipped. A line whose
    parent path was never declared becomes a root.

    Args:
        lines: Taxonomy lines.

    Returns:
        Records in input order, IDs taken from the taxonomy.
    """
    records: list[CategoryRecord] = []
    id_by_path: dict[str, str] = {}

    for line in lines:
        line = line.strip()
        if not line or line.startswith("#") or " - " not in line:
            continue

        id_part, path_part = line.split(" - ", 1)
        cat_id = id_part.strip()
        parts = [p.strip() for p in path_part.split(">")]
        if not cat_id or not parts[-1]:
            continue

        full_path = " > ".join(parts)
        parent_path = " > ".join(parts[:-1])
        id_by_path[full_path] = cat_id
        records.append(
            CategoryRecord(
                id=cat_id,
                name=parts[-1],
                parent_category_id=id_by_path.get(parent_path) if parent_path else None,
            )
        )

    return records
