"""Filter and prune protobuf messages with nested field masks."""

from fmutils.api import (
    build_mask,
    build_wildcard_mask,
    filter,
    filter_by_paths,
    prune,
    prune_by_paths,
    wildcard_filter_by_paths,
    wildcard_prune_by_paths,
)
from fmutils.domain.enums import FieldKind, TraversalMode
from fmutils.domain.models import MessageField
from fmutils.mask import NestedMask, WildcardNestedMask
from fmutils.reflection import MessageReflection, ProtoReflection
from fmutils.traversal import MaskTraversal

__all__ = [
    'build_mask', 'build_wildcard_mask', 'filter', 'prune',
    'filter_by_paths', 'prune_by_paths',
    'wildcard_filter_by_paths', 'wildcard_prune_by_paths',
    'NestedMask', 'WildcardNestedMask', 'MaskTraversal',
    'MessageReflection', 'ProtoReflection', 'MessageField',
    'FieldKind', 'TraversalMode',
]
