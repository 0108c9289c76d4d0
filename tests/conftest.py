"""Shared test fixtures.

Test messages are generated at import time from a FileDescriptorProto added
to a private descriptor pool, so no protoc run is needed:

    Dimensions { int32 width; int32 height }
    Photo      { int64 photo_id; string path; Dimensions dimensions }
    User       { int64 user_id; string name }
    Attribute  { map<string, string> tags }
    Profile    { User user; Photo photo; repeated int64 login_timestamps;
                 repeated Photo gallery; map<string, Attribute> attributes }
    Result     { bytes data; int64 next_token }
    Event      { int64 event_id;
                 oneof changed { User user; Photo photo;
                                 google.protobuf.Any details; Profile profile } }
    Settings   { map<int64, Photo> photos_by_id; map<bool, string> toggles;
                 map<string, string> labels }

A second, proto2 file adds an extendable message with two extensions:

    Extendable { optional int64 id = 1; extensions 100 to 199 }
    extend Extendable { optional string note = 100; optional Dimensions size = 101 }
"""

from types import SimpleNamespace

import pytest
from google.protobuf import any_pb2, descriptor_pb2, descriptor_pool, message_factory

F = descriptor_pb2.FieldDescriptorProto


def _camel(name: str, upper: bool = False) -> str:
    parts = name.split('_')
    head = parts[0].title() if upper else parts[0]
    return head + ''.join(p.title() for p in parts[1:])


def _field(msg, name, number, field_type, type_name='', repeated=False, oneof_index=None):
    f = msg.field.add(
        name=name,
        number=number,
        type=field_type,
        json_name=_camel(name),
        label=F.LABEL_REPEATED if repeated else F.LABEL_OPTIONAL,
    )
    if type_name:
        f.type_name = type_name
    if oneof_index is not None:
        f.oneof_index = oneof_index
    return f


def _map(msg, name, number, key_type, value_type, value_type_name=''):
    entry_name = _camel(name, upper=True) + 'Entry'
    entry = msg.nested_type.add(name=entry_name)
    entry.options.map_entry = True
    _field(entry, 'key', 1, key_type)
    _field(entry, 'value', 2, value_type, value_type_name)
    _field(msg, name, number, F.TYPE_MESSAGE, f'.testproto.{msg.name}.{entry_name}', repeated=True)


def _build_test_file() -> descriptor_pb2.FileDescriptorProto:
    file = descriptor_pb2.FileDescriptorProto(
        name='testproto/test.proto', package='testproto', syntax='proto3',
    )
    file.dependency.append('google/protobuf/any.proto')

    dims = file.message_type.add(name='Dimensions')
    _field(dims, 'width', 1, F.TYPE_INT32)
    _field(dims, 'height', 2, F.TYPE_INT32)

    photo = file.message_type.add(name='Photo')
    _field(photo, 'photo_id', 1, F.TYPE_INT64)
    _field(photo, 'path', 2, F.TYPE_STRING)
    _field(photo, 'dimensions', 3, F.TYPE_MESSAGE, '.testproto.Dimensions')

    user = file.message_type.add(name='User')
    _field(user, 'user_id', 1, F.TYPE_INT64)
    _field(user, 'name', 2, F.TYPE_STRING)

    attribute = file.message_type.add(name='Attribute')
    _map(attribute, 'tags', 1, F.TYPE_STRING, F.TYPE_STRING)

    profile = file.message_type.add(name='Profile')
    _field(profile, 'user', 1, F.TYPE_MESSAGE, '.testproto.User')
    _field(profile, 'photo', 2, F.TYPE_MESSAGE, '.testproto.Photo')
    _field(profile, 'login_timestamps', 3, F.TYPE_INT64, repeated=True)
    _field(profile, 'gallery', 4, F.TYPE_MESSAGE, '.testproto.Photo', repeated=True)
    _map(profile, 'attributes', 5, F.TYPE_STRING, F.TYPE_MESSAGE, '.testproto.Attribute')

    result = file.message_type.add(name='Result')
    _field(result, 'data', 1, F.TYPE_BYTES)
    _field(result, 'next_token', 2, F.TYPE_INT64)

    event = file.message_type.add(name='Event')
    event.oneof_decl.add(name='changed')
    _field(event, 'event_id', 1, F.TYPE_INT64)
    _field(event, 'user', 2, F.TYPE_MESSAGE, '.testproto.User', oneof_index=0)
    _field(event, 'photo', 3, F.TYPE_MESSAGE, '.testproto.Photo', oneof_index=0)
    _field(event, 'details', 4, F.TYPE_MESSAGE, '.google.protobuf.Any', oneof_index=0)
    _field(event, 'profile', 5, F.TYPE_MESSAGE, '.testproto.Profile', oneof_index=0)

    settings = file.message_type.add(name='Settings')
    _map(settings, 'photos_by_id', 1, F.TYPE_INT64, F.TYPE_MESSAGE, '.testproto.Photo')
    _map(settings, 'toggles', 2, F.TYPE_BOOL, F.TYPE_STRING)
    _map(settings, 'labels', 3, F.TYPE_STRING, F.TYPE_STRING)

    return file


def _build_extension_file() -> descriptor_pb2.FileDescriptorProto:
    file = descriptor_pb2.FileDescriptorProto(
        name='testproto/ext.proto', package='testproto.ext', syntax='proto2',
    )
    file.dependency.append('testproto/test.proto')

    extendable = file.message_type.add(name='Extendable')
    _field(extendable, 'id', 1, F.TYPE_INT64)
    extendable.extension_range.add(start=100, end=200)

    file.extension.add(
        name='note', number=100, type=F.TYPE_STRING, json_name='note',
        label=F.LABEL_OPTIONAL, extendee='.testproto.ext.Extendable',
    )
    file.extension.add(
        name='size', number=101, type=F.TYPE_MESSAGE, json_name='size',
        label=F.LABEL_OPTIONAL, extendee='.testproto.ext.Extendable',
        type_name='.testproto.Dimensions',
    )
    return file


TEST_FILE = _build_test_file()
EXTENSION_FILE = _build_extension_file()

_POOL = descriptor_pool.DescriptorPool()
_POOL.AddSerializedFile(any_pb2.DESCRIPTOR.serialized_pb)
_POOL.AddSerializedFile(TEST_FILE.SerializeToString())
_POOL.AddSerializedFile(EXTENSION_FILE.SerializeToString())


def _message_class(full_name: str) -> type:
    return message_factory.GetMessageClass(_POOL.FindMessageTypeByName(full_name))


_TESTPROTO = SimpleNamespace(
    Any=_message_class('google.protobuf.Any'),
    Dimensions=_message_class('testproto.Dimensions'),
    Photo=_message_class('testproto.Photo'),
    User=_message_class('testproto.User'),
    Attribute=_message_class('testproto.Attribute'),
    Profile=_message_class('testproto.Profile'),
    Result=_message_class('testproto.Result'),
    Event=_message_class('testproto.Event'),
    Settings=_message_class('testproto.Settings'),
    Extendable=_message_class('testproto.ext.Extendable'),
    note=_POOL.FindExtensionByName('testproto.ext.note'),
    size=_POOL.FindExtensionByName('testproto.ext.size'),
)


# ── Fixtures ─────────────────────────────────────────────────────────────

@pytest.fixture
def pb():
    """Namespace of the generated test message classes."""
    return _TESTPROTO


@pytest.fixture
def full_profile(pb):
    """Build a Profile with every field set."""
    def _build():
        return pb.Profile(
            user=pb.User(user_id=1, name='user name'),
            photo=pb.Photo(
                photo_id=2,
                path='photo path',
                dimensions=pb.Dimensions(width=100, height=120),
            ),
            login_timestamps=[1, 2],
        )
    return _build


@pytest.fixture
def attributes_event(pb):
    """Build an Event whose profile holds attributes a1..a3, each tagged t1..t3."""
    def _build(keys=('a1', 'a2', 'a3')):
        return pb.Event(
            event_id=1,
            profile=pb.Profile(attributes={
                key: pb.Attribute(tags={'t1': '1', 't2': '2', 't3': '3'}) for key in keys
            }),
        )
    return _build


@pytest.fixture
def descriptor_set_file(tmp_path):
    """Write a FileDescriptorSet with the test file and its imports."""
    file_set = descriptor_pb2.FileDescriptorSet()
    file_set.file.add().MergeFromString(any_pb2.DESCRIPTOR.serialized_pb)
    file_set.file.append(TEST_FILE)
    path = tmp_path / 'test.desc'
    path.write_bytes(file_set.SerializeToString())
    return str(path)


@pytest.fixture
def tmp_json(tmp_path):
    """Write JSON text to a temp file and return its path."""
    def _write(content: str, filename: str = 'message.json') -> str:
        path = tmp_path / filename
        path.write_text(content, encoding='utf-8')
        return str(path)
    return _write
