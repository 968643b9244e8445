"""
Path-keyed tree of validation errors.

Each node holds the errors reported exactly at its path plus its children,
keyed by the next path segment in insertion order. The tree is immutable;
every operation returns a new tree. A valid field has no entry at all.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator

from schema_form.models.error_value import ErrorValue
from schema_form.validation.paths import ROOT, Path, Segment, path_to_pointer


@dataclass(frozen=True)
class ErrorTree:
    """Errors grouped by path segment."""

    errors: tuple[ErrorValue, ...] = ()
    children: tuple[tuple[Segment, "ErrorTree"], ...] = ()

    @classmethod
    def group(cls, children: Iterable[tuple[Segment, "ErrorTree"]]) -> "ErrorTree":
        """
        Build a node from (segment, subtree) pairs.

        Grouping no children, or only empty subtrees, gives EMPTY_TREE.
        """
        tree = EMPTY_TREE
        for segment, child in children:
            tree = tree.merge(child.prefixed((segment,)))
        return tree

    @classmethod
    def single(cls, error: ErrorValue) -> "ErrorTree":
        """A tree with one error at the root."""
        return cls(errors=(error,))

    @classmethod
    def from_entries(cls, entries: Iterable[tuple[Path, ErrorValue]]) -> "ErrorTree":
        tree = EMPTY_TREE
        for path, error in entries:
            tree = tree.insert_at_path(path, error)
        return tree

    @property
    def is_empty(self) -> bool:
        return not self.errors and not self.children

    def __bool__(self) -> bool:
        return not self.is_empty

    def __len__(self) -> int:
        return len(self.errors) + sum(len(child) for _, child in self.children)

    def child(self, segment: Segment) -> "ErrorTree":
        for key, subtree in self.children:
            if key == segment and type(key) is type(segment):
                return subtree
        return EMPTY_TREE

    def _with_child(self, segment: Segment, subtree: "ErrorTree") -> "ErrorTree":
        children = []
        replaced = False
        for key, existing in self.children:
            if key == segment and type(key) is type(segment):
                children.append((key, subtree))
                replaced = True
            else:
                children.append((key, existing))
        if not replaced:
            children.append((segment, subtree))
        return ErrorTree(errors=self.errors, children=tuple(children))

    def insert_at_path(self, path: Path, error: ErrorValue) -> "ErrorTree":
        """Attach error at path, creating intermediate nodes as needed."""
        if not path:
            return ErrorTree(errors=self.errors + (error,), children=self.children)
        head, rest = path[0], path[1:]
        return self._with_child(head, self.child(head).insert_at_path(rest, error))

    def prefixed(self, prefix: Path) -> "ErrorTree":
        """Prepend prefix to every path in the tree."""
        if self.is_empty:
            return self
        tree = self
        for segment in reversed(prefix):
            tree = ErrorTree(children=((segment, tree),))
        return tree

    def merge(self, other: "ErrorTree") -> "ErrorTree":
        """Union of both trees; self's entries come first."""
        if other.is_empty:
            return self
        if self.is_empty:
            return other
        tree = ErrorTree(errors=self.errors + other.errors, children=self.children)
        for segment, subtree in other.children:
            tree = tree._with_child(segment, tree.child(segment).merge(subtree))
        return tree

    def map_paths(self, f) -> "ErrorTree":
        """Rebuild the tree with every path rewritten by f."""
        return ErrorTree.from_entries((f(path), error) for path, error in self.flatten_paths())

    def _walk(self, prefix: Path) -> Iterator[tuple[Path, ErrorValue]]:
        for error in self.errors:
            yield prefix, error
        for segment, subtree in self.children:
            yield from subtree._walk(prefix + (segment,))

    def flatten_paths(self) -> list[tuple[Path, ErrorValue]]:
        """Depth-first (path, error) pairs, parents before children."""
        return list(self._walk(ROOT))

    def flatten(self) -> list[tuple[str, ErrorValue]]:
        """Depth-first (JSON pointer, error) pairs, parents before children."""
        return [(path_to_pointer(path), error) for path, error in self._walk(ROOT)]

    def _node(self, path: Path) -> "ErrorTree":
        node = self
        for segment in path:
            node = node.child(segment)
            if node.is_empty:
                break
        return node

    def lookup(self, path: Path) -> ErrorValue | None:
        """First error at exactly path; errors below path do not count."""
        errors = self._node(path).errors
        return errors[0] if errors else None

    def lookup_all(self, path: Path) -> tuple[ErrorValue, ...]:
        return self._node(path).errors


EMPTY_TREE = ErrorTree()
