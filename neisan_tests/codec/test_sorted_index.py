from typing import Any, Iterable, Optional

from sortedcontainers import SortedDict

from neisan.codec import Codec, UnknownType
from neisan.conf import CodecSettings
from neisan_tests import unittest

codec = Codec(CodecSettings())

RecordKey = tuple[int, int]


def _encode_index(index: 'RecordIndex') -> list[Any]:
    return [index.name, [[list(key), value] for key, value in index.items()]]


def _revive_index(fields: list[Any]) -> 'RecordIndex':
    name, entries = fields
    assert isinstance(name, str)
    assert isinstance(entries, list)
    return RecordIndex([((id_, lsn), value) for (id_, lsn), value in entries], name=name)


@codec.encodable(encode=_encode_index, revive=_revive_index)
class RecordIndex(SortedDict):
    """Index of record positions keyed by (id, lsn), sorted by id then lsn."""

    def __init__(self, entries: Optional[Iterable[tuple[RecordKey, int]]] = None, name: str = 'records') -> None:
        super().__init__()
        self.name = name
        if entries is not None:
            self.update(entries)

    def positions_of(self, id_: int) -> list[int]:
        return [self[key] for key in self.irange((id_,), (id_ + 1,), inclusive=(True, False))]


class SortedIndexTest(unittest.TestCase):
    def _build_index(self) -> RecordIndex:
        index = RecordIndex(name='users')
        for i in range(100):
            index[(i % 5, i)] = i
        return index

    def test_marker(self) -> None:
        self.assertEqual(getattr(RecordIndex, '__neisan_type_id__'), '$$RecordIndex')
        self.assertEqual(codec.registry.tag_for('$$RecordIndex'), 11)

    def test_round_trip(self) -> None:
        index = self._build_index()
        self.assertEqual(len(index), 100)
        self.assertEqual(len(index.positions_of(0)), 20)

        data = codec.encode(index)
        self.assertEqual(data[0], 11)
        decoded = codec.decode(data)
        self.assertIsInstance(decoded, RecordIndex)
        self.assertEqual(decoded.name, 'users')
        self.assertEqual(len(decoded), len(index))
        self.assertEqual(list(decoded.items()), list(index.items()))
        self.assertEqual(decoded.positions_of(3), [3, 8, 13, 18, 23, 28, 33, 38, 43, 48, 53, 58, 63, 68, 73, 78, 83, 88,
                                                   93, 98])

    def test_nested_in_built_in_values(self) -> None:
        index = self._build_index()
        decoded = codec.decode(codec.encode({'users': index, 'empty': RecordIndex()}))
        self.assertEqual(list(decoded['users'].keys()), list(index.keys()))
        self.assertEqual(len(decoded['empty']), 0)
        self.assertEqual(decoded['empty'].name, 'records')

    def test_other_codec(self) -> None:
        with self.assertRaises(UnknownType):
            self.codec.encode(RecordIndex())
