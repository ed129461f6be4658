from structlog.testing import capture_logs

from neisan.codec import (
    FIRST_CUSTOM_TAG,
    BuiltinTag,
    CustomCodecPair,
    DuplicateRegistration,
    InvalidCustomCodec,
    RegistrationError,
    TypeDescriptor,
    TypeRegistry,
)
from neisan.codec.values import MARKER_ATTR
from neisan_tests import unittest


class TypeRegistryTest(unittest.TestCase):
    def test_builtin_tags(self) -> None:
        registry = TypeRegistry()
        self.assertEqual(len(registry), 11)
        self.assertEqual(FIRST_CUSTOM_TAG, 11)
        for tag in BuiltinTag:
            self.assertIn(tag.type_id, registry)
            self.assertEqual(registry.tag_for(tag.type_id), tag)
            self.assertIsNone(registry.descriptor_for_tag(tag))
            self.assertIsNone(registry.decoder_for(tag))
        self.assertEqual(registry.registered_tags(), {})

    def test_tags_follow_registration_order(self) -> None:
        class First:
            pass

        class Second:
            pass

        class Third:
            pass

        tags = [self.codec.register(cls) for cls in (First, Second, Third)]
        self.assertEqual(tags, [11, 12, 13])
        self.assertEqual(self.codec.registry.registered_tags(), {'$$First': 11, '$$Second': 12, '$$Third': 13})
        self.assertEqual(len(self.codec.registry), 14)
        self.assertTrue(self.codec.registry.has_type_id('$$Second'))
        self.assertEqual(getattr(Third, MARKER_ATTR), '$$Third')

    def test_duplicate_registration(self) -> None:
        class User:
            pass

        class OtherUser:
            pass

        self.codec.register(User)
        before = self.codec.registry.registered_tags()
        with self.assertRaises(DuplicateRegistration):
            self.codec.register(OtherUser, name='User')
        self.assertEqual(self.codec.registry.registered_tags(), before)
        self.assertFalse(hasattr(OtherUser, MARKER_ATTR))
        # the failed registration did not consume a tag
        self.assertEqual(self.codec.register(OtherUser), 12)

    def test_name_override(self) -> None:
        class Point:
            pass

        tag = self.codec.register(Point, name='geo.Point')
        self.assertEqual(self.codec.registry.tag_for('$$geo.Point'), tag)
        self.assertNotIn('$$Point', self.codec.registry)
        descriptor = self.codec.registry.descriptor_for_tag(tag)
        assert descriptor is not None
        self.assertEqual(descriptor.type_id, '$$geo.Point')
        self.assertIs(descriptor.type_, Point)

    def test_invalid_pair(self) -> None:
        class Broken:
            pass

        with self.assertRaises(InvalidCustomCodec):
            self.codec.register(Broken, CustomCodecPair(lambda value: [], 'not callable'))  # type: ignore[arg-type]
        with self.assertRaises(InvalidCustomCodec):
            self.codec.register(Broken, (lambda value: [],))  # type: ignore[arg-type]
        self.assertNotIn('$$Broken', self.codec.registry)
        self.assertFalse(hasattr(Broken, MARKER_ATTR))

    def test_pair_tables(self) -> None:
        class Plain:
            pass

        class Custom:
            pass

        plain_tag = self.codec.register(Plain)
        custom_tag = self.codec.register(Custom, (lambda value: [], lambda fields: Custom()))
        self.assertIsNone(self.codec.registry.encode_helper_for(plain_tag))
        self.assertIsNotNone(self.codec.registry.encode_helper_for(custom_tag))
        self.assertIsNotNone(self.codec.registry.decoder_for(plain_tag))
        self.assertIsNotNone(self.codec.registry.decoder_for(custom_tag))

    def test_collection_needs_pair(self) -> None:
        class Bag(dict):
            pass

        with self.assertRaises(RegistrationError):
            self.codec.register(Bag)
        tag = self.codec.register(Bag, (lambda bag: [list(bag.items())], lambda fields: Bag(fields[0])))
        self.assertEqual(tag, FIRST_CUSTOM_TAG)

    def test_only_classes(self) -> None:
        with self.assertRaises(RegistrationError):
            self.codec.register(object())  # type: ignore[arg-type]
        with self.assertRaises(RegistrationError):
            self.codec.registry.register(TypeDescriptor('thing', 'not a class'))  # type: ignore[arg-type]

    def test_class_keeps_its_identifier(self) -> None:
        class Shared:
            pass

        self.codec.register(Shared)
        # another codec can register the same class under the same name
        other = self.create_codec()
        self.assertEqual(other.register(Shared), FIRST_CUSTOM_TAG)
        # but not under another name, the marker lives on the class
        with self.assertRaises(RegistrationError):
            self.create_codec().register(Shared, name='Renamed')

    def test_encodable_decorator(self) -> None:
        @self.codec.encodable()
        class Decorated:
            pass

        self.assertEqual(Decorated.__name__, 'Decorated')
        self.assertIn('$$Decorated', self.codec.registry)

        with self.assertRaises(InvalidCustomCodec):
            self.codec.encodable(encode=lambda value: [])
        with self.assertRaises(InvalidCustomCodec):
            self.codec.encodable(CustomCodecPair(list, list), revive=list)

    def test_registration_is_logged(self) -> None:
        class Logged:
            pass

        with capture_logs() as logs:
            tag = self.codec.register(Logged)
        self.assertIn(
            {'event': 'type registered', 'log_level': 'debug', 'type_id': '$$Logged', 'tag': tag, 'custom_codec': False},
            logs,
        )
