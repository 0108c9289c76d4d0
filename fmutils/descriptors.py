"""Descriptor set reader for protoc-generated FileDescriptorSet files."""
import logging
from dataclasses import dataclass
from typing import List

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

logger = logging.getLogger(__name__)


class DescriptorLoadError(Exception):
    """Error loading a descriptor set or resolving a message type."""
    pass


@dataclass
class DescriptorSetContents:
    """Descriptor set contents."""
    pool: descriptor_pool.DescriptorPool
    files: List[str]
    message_types: List[str]


def _collect_message_types(prefix: str, messages, out: List[str]) -> None:
    for msg in messages:
        # Synthetic map entry types are not addressable messages.
        if msg.options.map_entry:
            continue
        full_name = f"{prefix}.{msg.name}" if prefix else msg.name
        out.append(full_name)
        _collect_message_types(full_name, msg.nested_type, out)


class DescriptorSetReader:
    """Loads FileDescriptorSet files into a private descriptor pool."""

    def read(self, path: str) -> DescriptorSetContents:
        """Read a descriptor set written by `protoc --include_imports --descriptor_set_out`."""
        try:
            with open(path, 'rb') as f:
                file_set = descriptor_pb2.FileDescriptorSet.FromString(f.read())
        except Exception as e:
            raise DescriptorLoadError(f"Failed to read descriptor set {path}: {e}") from e
        return self.load(file_set)

    def load(self, file_set: descriptor_pb2.FileDescriptorSet) -> DescriptorSetContents:
        """Add every file of the set to a fresh pool, dependencies first."""
        pool = descriptor_pool.DescriptorPool()
        files: List[str] = []
        message_types: List[str] = []

        for file_proto in file_set.file:
            try:
                pool.AddSerializedFile(file_proto.SerializeToString())
            except Exception as e:
                raise DescriptorLoadError(
                    f"Failed to load {file_proto.name} (was the set built with --include_imports?): {e}"
                ) from e
            files.append(file_proto.name)
            _collect_message_types(file_proto.package, file_proto.message_type, message_types)
            logger.debug("Loaded %s", file_proto.name)

        logger.info("Loaded %d files, %d message types", len(files), len(message_types))
        return DescriptorSetContents(pool=pool, files=files, message_types=message_types)


def message_class(contents: DescriptorSetContents, full_name: str) -> type:
    """Return the generated message class for a fully qualified type name."""
    try:
        descriptor = contents.pool.FindMessageTypeByName(full_name)
    except KeyError as e:
        raise DescriptorLoadError(f"Unknown message type: {full_name}") from e
    return message_factory.GetMessageClass(descriptor)
