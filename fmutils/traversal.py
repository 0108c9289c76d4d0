"""Recursive filter/prune engine shared by exact and wildcard masks.

The engine walks the fields present on a message, looks each field name up
in the mask through a key-resolution strategy, and keeps, clears or descends
into the field depending on the mode:

    lookup            Filter              Prune
    absent            clear               untouched
    leaf              keep                clear
    non-leaf          recurse             recurse

Map entries follow the same table keyed by the stringified map key. Scalar
fields (and scalar lists) matched by a non-leaf subtree are left as they are.
"""

from typing import Any, Callable, Mapping, Optional

from fmutils.domain.constants import WILDCARD
from fmutils.domain.enums import FieldKind, TraversalMode
from fmutils.domain.models import MessageField
from fmutils.reflection import MessageReflection

Resolver = Callable[[Mapping[str, Any], str], Optional[Mapping[str, Any]]]


def resolve_exact(mask: Mapping[str, Any], key: str) -> Optional[Mapping[str, Any]]:
    """Subtree for key, or None when the mask does not list it."""
    return mask.get(key)


def resolve_wildcard(mask: Mapping[str, Any], key: str) -> Optional[Mapping[str, Any]]:
    """Subtree for key, falling back to the wildcard subtree."""
    sub = mask.get(key)
    if sub is None:
        sub = mask.get(WILDCARD)
    return sub


class MaskTraversal:
    """Applies a mask tree to a message in place."""

    def __init__(self, mode: TraversalMode, resolve: Resolver, reflection: MessageReflection):
        self.mode = mode
        self.resolve = resolve
        self.reflection = reflection

    def apply(self, message: Any, mask: Mapping[str, Any]) -> None:
        # An empty mask keeps everything under Filter and clears nothing under Prune.
        if not mask:
            return

        filtering = self.mode is TraversalMode.FILTER
        for field in self.reflection.fields(message):
            sub = self.resolve(mask, field.name)
            if sub is None:
                if filtering:
                    self.reflection.clear_field(message, field)
                continue

            if not sub:
                if not filtering:
                    self.reflection.clear_field(message, field)
                continue

            self._descend(message, field, sub)

    def _descend(self, message: Any, field: MessageField, sub: Mapping[str, Any]) -> None:
        if field.kind is FieldKind.MAP:
            self._apply_map(message, field, sub)
        elif field.kind is FieldKind.LIST:
            if field.holds_messages:
                for element in self.reflection.get_list(message, field):
                    self.apply(element, sub)
        elif field.kind is FieldKind.MESSAGE:
            self.apply(self.reflection.get_message(message, field), sub)

    def _apply_map(self, message: Any, field: MessageField, sub: Mapping[str, Any]) -> None:
        filtering = self.mode is TraversalMode.FILTER
        for key, value in self.reflection.map_entries(message, field):
            entry_mask = self.resolve(sub, self.reflection.map_key_to_str(key))
            if entry_mask is None:
                if filtering:
                    self.reflection.clear_map_entry(message, field, key)
            elif entry_mask and field.holds_messages:
                self.apply(value, entry_mask)
            elif not filtering:
                self.reflection.clear_map_entry(message, field, key)
