"""Marker store tests against the in-memory backend."""

import tomllib

import pytest
import tomlkit

from pyclock._errors import (
    InvalidNumericInputError,
    MarkerNotFoundError,
    StorageParseError,
)
from pyclock.markers import Marker, MarkerStore
from pyclock.storage import MemoryBackend


class TestAddAndList:
    def test_empty_store(self, memory_store):
        assert memory_store.list() == []
        assert memory_store.count() == 0

    def test_add_then_list(self, memory_store):
        memory_store.add(100, "test")
        assert memory_store.list() == [(1, Marker(timestamp=100, description="test"))]

    def test_add_returns_position(self, memory_store):
        assert memory_store.add(100, "a") == 1
        assert memory_store.add(50, "b") == 2

    def test_insertion_order_and_duplicates_kept(self, memory_store):
        memory_store.add(300, "late")
        memory_store.add(100, "early")
        memory_store.add(300, "late")
        assert [m for _, m in memory_store.list()] == [
            Marker(300, "late"),
            Marker(100, "early"),
            Marker(300, "late"),
        ]

    def test_empty_description(self, memory_store):
        memory_store.add(7)
        assert memory_store.get(1) == Marker(7, "")

    def test_quotes_and_backslashes_escaped(self, memory_store, memory_backend):
        text = 'say "hi" \\ then \'bye\''
        memory_store.add(1, text)
        assert memory_store.get(1).description == text
        assert tomllib.loads(memory_backend.text)["events"][0]["description"] == text

    def test_timestamp_beyond_toml_integer_range_rejected(self, memory_store, memory_backend):
        with pytest.raises(InvalidNumericInputError):
            memory_store.add(2**63, "x")
        assert memory_backend.text == ""

    def test_largest_toml_integer_accepted(self, memory_store):
        memory_store.add(2**63 - 1, "x")
        assert memory_store.get(1).timestamp == 2**63 - 1

    def test_negative_timestamp_rejected(self, memory_store, memory_backend):
        with pytest.raises(InvalidNumericInputError):
            memory_store.add(-1, "x")
        assert memory_backend.text == ""


class TestGet:
    def test_by_position(self, memory_store):
        memory_store.add(1, "one")
        memory_store.add(2, "two")
        assert memory_store.get(2) == Marker(2, "two")

    @pytest.mark.parametrize("position", [0, -1, 3, 100])
    def test_out_of_range(self, memory_store, position):
        memory_store.add(1, "one")
        memory_store.add(2, "two")
        with pytest.raises(MarkerNotFoundError, match="marker not found"):
            memory_store.get(position)

    def test_empty_store(self, memory_store):
        with pytest.raises(MarkerNotFoundError) as exc:
            memory_store.get(1)
        assert "1..0" in exc.value.internal()


class TestClear:
    def test_clear_then_list(self, memory_store):
        memory_store.add(100, "test")
        memory_store.clear()
        assert memory_store.list() == []

    def test_clear_keeps_events_key(self, memory_store, memory_backend):
        memory_store.add(100, "test")
        memory_store.clear()
        assert tomllib.loads(memory_backend.text) == {"events": []}

    def test_add_after_clear(self, memory_store):
        memory_store.add(1, "a")
        memory_store.clear()
        assert memory_store.add(2, "b") == 1
        assert memory_store.list() == [(1, Marker(2, "b"))]


class TestDocumentFormat:
    def test_events_array_of_inline_tables(self, memory_store, memory_backend):
        memory_store.add(100, "test")
        memory_store.add(200, "again")
        doc = tomlkit.parse(memory_backend.text)
        assert isinstance(doc["events"], tomlkit.items.Array)
        assert all(isinstance(r, tomlkit.items.InlineTable) for r in doc["events"])
        assert tomllib.loads(memory_backend.text) == {
            "events": [
                {"timestamp": 100, "description": "test"},
                {"timestamp": 200, "description": "again"},
            ]
        }

    def test_reserialize_is_byte_identical(self, memory_store, memory_backend):
        for i in range(5):
            memory_store.add(i * 1000, f"marker {i}")
        text = memory_backend.text
        assert tomlkit.dumps(tomlkit.parse(text)) == text

    def test_reads_do_not_rewrite(self, memory_backend):
        text = "# mine\nevents = [ { timestamp = 1, description = \"a\" } ]\n"
        memory_backend.text = text
        store = MarkerStore(memory_backend)
        store.list()
        store.get(1)
        assert memory_backend.text == text

    def test_add_keeps_other_content(self):
        backend = MemoryBackend(
            '# my markers\ntitle = "work"\n\nevents = [{timestamp = 1, description = "a"}]\n'
        )
        MarkerStore(backend).add(2, "b")
        assert backend.text.startswith('# my markers\ntitle = "work"\n')
        assert tomllib.loads(backend.text) == {
            "title": "work",
            "events": [
                {"timestamp": 1, "description": "a"},
                {"timestamp": 2, "description": "b"},
            ],
        }

    def test_multiline_layout_survives_clear(self, memory_store, memory_backend):
        for i in range(3):
            memory_store.add(i, f"m{i}")
        memory_store.clear()
        assert memory_backend.text == "events = []\n"
        memory_store.add(9, "z")
        memory_store.add(10, "y")
        assert memory_backend.text.startswith("events = [\n    {")
        assert memory_backend.text.endswith("},\n]\n")
        assert tomllib.loads(memory_backend.text) == {
            "events": [
                {"timestamp": 9, "description": "z"},
                {"timestamp": 10, "description": "y"},
            ]
        }

    def test_hand_written_empty_array_becomes_multiline(self):
        backend = MemoryBackend("events = []\n")
        MarkerStore(backend).add(1, "a")
        assert backend.text.startswith("events = [\n    {")

    def test_missing_events_key(self):
        backend = MemoryBackend('title = "work"\n')
        store = MarkerStore(backend)
        assert store.list() == []
        store.add(5, "first")
        assert tomllib.loads(backend.text)["events"] == [
            {"timestamp": 5, "description": "first"}
        ]

    def test_array_of_tables(self):
        backend = MemoryBackend('[[events]]\ntimestamp = 1\ndescription = "a"\n')
        store = MarkerStore(backend)
        assert store.list() == [(1, Marker(1, "a"))]
        store.add(2, "b")
        assert [m for _, m in store.list()] == [Marker(1, "a"), Marker(2, "b")]


class TestMalformedDocument:
    @pytest.mark.parametrize(
        "text",
        [
            "events = [",
            "events = 5\n",
            "[events]\ntimestamp = 1\n",
            "events = [1, 2]\n",
            'events = [{description = "x"}]\n',
            'events = [{timestamp = -1, description = "x"}]\n',
            'events = [{timestamp = "1", description = "x"}]\n',
            'events = [{timestamp = true, description = "x"}]\n',
            "events = [{timestamp = 1, description = 2}]\n",
        ],
    )
    def test_list_raises(self, text):
        with pytest.raises(StorageParseError, match="could not parse marker file"):
            MarkerStore(MemoryBackend(text)).list()

    def test_failed_mutation_leaves_document(self):
        text = "events = [1, 2]\n"
        backend = MemoryBackend(text)
        store = MarkerStore(backend)
        with pytest.raises(StorageParseError):
            store.add(1, "x")
        with pytest.raises(StorageParseError):
            store.clear()
        assert backend.text == text
