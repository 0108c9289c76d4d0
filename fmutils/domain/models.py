"""Shared data models used across fmutils modules."""

from dataclasses import dataclass, field
from typing import Any

from fmutils.domain.enums import FieldKind, TraversalMode


@dataclass(frozen=True)
class MessageField:
    """
    A field currently present on a message.

    Attributes:
        name: Field name matched against mask keys
        kind: Shape of the field
        holds_messages: Whether list elements / map values are messages
        handle: Adapter-specific reference (a FieldDescriptor for protobuf)
    """
    name: str
    kind: FieldKind
    holds_messages: bool = False
    handle: Any = None


@dataclass
class ApplyOptions:
    """Options controlling a filter/prune run over a JSON document."""

    message_type: str
    paths: list[str] = field(default_factory=list)
    mode: TraversalMode = TraversalMode.FILTER
    wildcard: bool = False
    pretty: bool = True


@dataclass
class ApplyResult:
    """Result summary of a filter/prune run."""

    message_type: str
    mode: TraversalMode
    fields_before: int
    fields_after: int
    output_path: str | None = None
