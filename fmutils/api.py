"""One-shot helpers composing mask building with filter/prune.

When the same paths are applied to many messages, build the mask once with
build_mask / build_wildcard_mask and call its filter/prune methods directly.
"""

import logging
from typing import Any, Iterable

from fmutils.mask import NestedMask, WildcardNestedMask
from fmutils.reflection import PROTO_REFLECTION, MessageReflection

logger = logging.getLogger(__name__)


def build_mask(paths: Iterable[str]) -> NestedMask:
    return NestedMask.from_paths(paths)


def build_wildcard_mask(paths: Iterable[str]) -> WildcardNestedMask:
    return WildcardNestedMask.from_paths(paths)


# Shadows the builtin filter in this module; use builtins.filter if needed here.
def filter(message: Any, mask: NestedMask, reflection: MessageReflection = PROTO_REFLECTION) -> None:
    """Keep the fields listed in mask and clear all the rest."""
    mask.filter(message, reflection)


def prune(message: Any, mask: NestedMask, reflection: MessageReflection = PROTO_REFLECTION) -> None:
    """Clear the fields listed in mask and keep all the rest."""
    mask.prune(message, reflection)


def filter_by_paths(message: Any, paths: Iterable[str], reflection: MessageReflection = PROTO_REFLECTION) -> None:
    mask = build_mask(paths)
    logger.debug("Filtering with mask %r", mask)
    mask.filter(message, reflection)


def prune_by_paths(message: Any, paths: Iterable[str], reflection: MessageReflection = PROTO_REFLECTION) -> None:
    mask = build_mask(paths)
    logger.debug("Pruning with mask %r", mask)
    mask.prune(message, reflection)


def wildcard_filter_by_paths(
    message: Any, paths: Iterable[str], reflection: MessageReflection = PROTO_REFLECTION,
) -> None:
    """filter_by_paths accepting "*" segments."""
    mask = build_wildcard_mask(paths)
    logger.debug("Filtering with wildcard mask %r", mask)
    mask.filter(message, reflection)


def wildcard_prune_by_paths(
    message: Any, paths: Iterable[str], reflection: MessageReflection = PROTO_REFLECTION,
) -> None:
    """prune_by_paths accepting "*" segments."""
    mask = build_wildcard_mask(paths)
    logger.debug("Pruning with wildcard mask %r", mask)
    mask.prune(message, reflection)
