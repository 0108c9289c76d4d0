"""
Nested field masks.

A mask is a prefix tree compiled from dot-delimited field paths:

    NestedMask.from_paths(['user.name', 'photo'])
    # {'user': {'name': {}}, 'photo': {}}

An empty node is a leaf: the field it names is matched in full and its
internals are not inspected. Masks are immutable once built and can be
reused across any number of messages.
"""

from collections.abc import Mapping
from typing import Any, Iterable, Iterator, Optional

from fmutils.domain.constants import PATH_DELIMITER
from fmutils.domain.enums import TraversalMode
from fmutils.reflection import PROTO_REFLECTION, MessageReflection
from fmutils.traversal import MaskTraversal, resolve_exact, resolve_wildcard


def split_path(path: str) -> list[str]:
    """Split a path into segments, dropping empty ones ("a..b." -> ['a', 'b'])."""
    return [segment for segment in path.split(PATH_DELIMITER) if segment]


def _build_tree(paths: Iterable[str]) -> dict[str, dict]:
    tree: dict[str, dict] = {}
    for path in paths:
        node = tree
        for segment in split_path(path):
            # Existing nodes are reused, so a shorter path never turns a
            # populated subtree back into a leaf.
            node = node.setdefault(segment, {})
    return tree


class NestedMask(Mapping):
    """Field mask represented as a recursive mapping of segment -> NestedMask."""

    __slots__ = ('_children',)

    def __init__(self, children: Optional[Mapping[str, Any]] = None):
        self._children = {
            key: child if type(child) is type(self) else type(self)(child)
            for key, child in (children or {}).items()
        }

    @classmethod
    def from_paths(cls, paths: Iterable[str]) -> 'NestedMask':
        """Compile field paths into a mask. Malformed fragments are absorbed."""
        return cls(_build_tree(paths))

    @classmethod
    def from_field_mask(cls, field_mask: Any) -> 'NestedMask':
        """Compile a google.protobuf.FieldMask (or anything with .paths)."""
        return cls.from_paths(field_mask.paths)

    def __getitem__(self, key: str) -> 'NestedMask':
        return self._children[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._children)

    def __len__(self) -> int:
        return len(self._children)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_dict()!r})"

    @property
    def is_leaf(self) -> bool:
        return not self._children

    def to_dict(self) -> dict[str, dict]:
        """Plain nested dict copy of the tree."""
        return {key: child.to_dict() for key, child in self._children.items()}

    def paths(self) -> list[str]:
        """Sorted, normalized leaf paths the mask was built from."""
        result: list[str] = []
        for key, child in self._children.items():
            if child.is_leaf:
                result.append(key)
            else:
                result.extend(f"{key}{PATH_DELIMITER}{sub}" for sub in child.paths())
        return sorted(result)

    def _resolve(self, mask: Mapping[str, Any], key: str) -> Optional[Mapping[str, Any]]:
        return resolve_exact(mask, key)

    def filter(self, message: Any, reflection: MessageReflection = PROTO_REFLECTION) -> None:
        """
        Keep the message fields listed in the mask and clear all the rest.

        If the mask is empty then all the fields are kept. The message is
        modified in place.
        """
        MaskTraversal(TraversalMode.FILTER, self._resolve, reflection).apply(message, self)

    def prune(self, message: Any, reflection: MessageReflection = PROTO_REFLECTION) -> None:
        """
        Clear the message fields listed in the mask, keeping all the rest.

        If the mask is empty no fields are cleared. This is the opposite of
        filter. The message is modified in place.
        """
        MaskTraversal(TraversalMode.PRUNE, self._resolve, reflection).apply(message, self)


class WildcardNestedMask(NestedMask):
    """
    NestedMask whose segments may be the wildcard "*".

    At every field name or map key the exact segment wins; "*" applies only
    to keys without an exact entry of their own at that level.
    """

    __slots__ = ()

    def _resolve(self, mask: Mapping[str, Any], key: str) -> Optional[Mapping[str, Any]]:
        return resolve_wildcard(mask, key)
