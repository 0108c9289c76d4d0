"""
Message reflection adapters.

The traversal engine never touches a message directly. It asks a
MessageReflection which fields are present, what shape they have, and how to
clear them or a single map entry. ProtoReflection implements this on top of
the protobuf Python message API.
"""

from abc import ABC, abstractmethod
from typing import Any, Sequence

from google.protobuf.descriptor import FieldDescriptor
from google.protobuf.message import Message

from fmutils.domain.enums import FieldKind
from fmutils.domain.models import MessageField


class MessageReflection(ABC):
    """Field-level view of a structured message used by MaskTraversal."""

    @abstractmethod
    def fields(self, message: Any) -> list[MessageField]:
        """Return the fields currently present on the message.

        Unset fields and absent oneof members must not be returned.
        """

    @abstractmethod
    def clear_field(self, message: Any, field: MessageField) -> None:
        """Clear the field entirely."""

    @abstractmethod
    def get_message(self, message: Any, field: MessageField) -> Any:
        """Return the nested message held by a singular message field."""

    @abstractmethod
    def get_list(self, message: Any, field: MessageField) -> Sequence[Any]:
        """Return the elements of a repeated field."""

    @abstractmethod
    def map_entries(self, message: Any, field: MessageField) -> list[tuple[Any, Any]]:
        """Return a snapshot of (key, value) pairs of a map field."""

    @abstractmethod
    def clear_map_entry(self, message: Any, field: MessageField, key: Any) -> None:
        """Remove a single entry from a map field."""

    @abstractmethod
    def map_key_to_str(self, key: Any) -> str:
        """Canonical string form of a map key, matched against mask keys."""


def _is_map_field(fd: FieldDescriptor) -> bool:
    return (
        fd.type == FieldDescriptor.TYPE_MESSAGE
        and fd.message_type.has_options
        and fd.message_type.GetOptions().map_entry
    )


class ProtoReflection(MessageReflection):
    """MessageReflection for google.protobuf messages."""

    def fields(self, message: Message) -> list[MessageField]:
        return [self.describe(fd) for fd, _ in message.ListFields()]

    def describe(self, fd: FieldDescriptor) -> MessageField:
        """Classify a field descriptor into a MessageField."""
        if _is_map_field(fd):
            value_fd = fd.message_type.fields_by_name['value']
            return MessageField(
                name=fd.name,
                kind=FieldKind.MAP,
                holds_messages=value_fd.type == FieldDescriptor.TYPE_MESSAGE,
                handle=fd,
            )

        is_message = fd.type in (FieldDescriptor.TYPE_MESSAGE, FieldDescriptor.TYPE_GROUP)
        if fd.is_repeated:
            return MessageField(fd.name, FieldKind.LIST, is_message, fd)
        if is_message:
            return MessageField(fd.name, FieldKind.MESSAGE, True, fd)
        return MessageField(fd.name, FieldKind.SCALAR, False, fd)

    def clear_field(self, message: Message, field: MessageField) -> None:
        fd = field.handle
        if fd.is_extension:
            message.ClearExtension(fd)
        else:
            message.ClearField(fd.name)

    def _value(self, message: Message, field: MessageField) -> Any:
        fd = field.handle
        if fd.is_extension:
            return message.Extensions[fd]
        return getattr(message, fd.name)

    def get_message(self, message: Message, field: MessageField) -> Message:
        return self._value(message, field)

    def get_list(self, message: Message, field: MessageField) -> Sequence[Any]:
        return self._value(message, field)

    def map_entries(self, message: Message, field: MessageField) -> list[tuple[Any, Any]]:
        return list(self._value(message, field).items())

    def clear_map_entry(self, message: Message, field: MessageField, key: Any) -> None:
        del self._value(message, field)[key]

    def map_key_to_str(self, key: Any) -> str:
        # bool is checked first: str(True) would give 'True'
        if isinstance(key, bool):
            return 'true' if key else 'false'
        return str(key)


PROTO_REFLECTION = ProtoReflection()
