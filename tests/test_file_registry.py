"""Tests for FileRegistry."""

import math

from scitree.models import FileRecord, records
from scitree.registry import FileRegistry, capped

MIB = 2**20


def sized(name: str, size_mib: int) -> FileRecord:
    """A record whose blob starts with its name so each one is unique."""
    header = name.encode()
    return FileRecord(name=name, blob=header + b"x" * (size_mib * MIB - len(header)))


class TestAdd:
    def test_same_content_registers_once(self):
        registry = FileRegistry()
        first = registry.add(FileRecord(name="a.txt", blob=b"PT J\nAU Smith\n"))
        second = registry.add(FileRecord(name="copy.txt", blob=b"PT J\nAU Smith\n"))

        assert len(registry) == 1
        assert second is first
        assert registry.files()[0].name == "a.txt"

    def test_different_content_same_name_registers_twice(self):
        registry = FileRegistry()
        registry.add(FileRecord(name="a.txt", blob=b"one"))
        registry.add(FileRecord(name="a.txt", blob=b"two"))
        assert len(registry) == 2

    def test_add_starts_progress_at_zero(self):
        registry = FileRegistry()
        record = registry.add(FileRecord(name="a.txt", blob=b"one"))
        assert registry.progress.get(record.identity) == 0.0

    def test_duplicate_add_keeps_progress(self):
        registry = FileRegistry()
        record = registry.add(FileRecord(name="a.txt", blob=b"one"))
        registry.track(record.identity, 0.5)
        registry.add(FileRecord(name="b.txt", blob=b"one"))
        assert registry.progress.get(record.identity) == 0.5

    def test_add_computes_capped_flag(self):
        registry = FileRegistry(max_size=10)
        records = [registry.add(sized(f"f{i}", 4)) for i in range(3)]
        assert [registry.is_capped(r.identity) for r in records] == [False, False, True]


class TestRemove:
    def test_remove_drops_record_and_progress(self):
        registry = FileRegistry()
        record = registry.add(FileRecord(name="a.txt", blob=b"one"))
        assert registry.remove(record.identity)
        assert record.identity not in registry
        assert registry.progress.get(record.identity) is None

    def test_remove_unknown_is_noop(self):
        registry = FileRegistry()
        registry.add(FileRecord(name="a.txt", blob=b"one"))
        assert registry.remove("nope") is False
        assert len(registry) == 1

    def test_remove_uncaps_later_files(self):
        registry = FileRegistry(max_size=10)
        first, _, third = [registry.add(sized(f"f{i}", 4)) for i in range(3)]
        assert registry.is_capped(third.identity)

        registry.remove(first.identity)
        assert not registry.is_capped(third.identity)
        assert first.identity not in registry.capped


class TestMove:
    def test_move_promotes_by_one(self):
        registry = FileRegistry()
        a, b, c = [registry.add(FileRecord(name=n, blob=n.encode())) for n in "abc"]
        assert registry.move(c.identity)
        assert [r.name for r in registry] == ["a", "c", "b"]

    def test_move_first_swaps_with_second(self):
        registry = FileRegistry()
        a, b, c = [registry.add(FileRecord(name=n, blob=n.encode())) for n in "abc"]
        registry.swap(a.identity)
        assert [r.name for r in registry] == ["b", "a", "c"]

    def test_move_single_or_unknown_is_noop(self):
        registry = FileRegistry()
        only = registry.add(FileRecord(name="a", blob=b"a"))
        assert registry.move(only.identity) is False
        assert registry.move("missing") is False

    def test_move_recomputes_whole_sequence(self):
        registry = FileRegistry(max_size=10)
        records = [
            registry.add(sized("big", 8)),
            registry.add(sized("small1", 1)),
            registry.add(sized("small2", 2)),
            registry.add(sized("small3", 1)),
        ]
        registry.move(records[2].identity)

        order = registry.files()
        expected = capped([r.size_bytes for r in order], 10)
        assert [registry.is_capped(r.identity) for r in order] == expected
        assert [r.name for r in order] == ["big", "small2", "small1", "small3"]
        assert expected == [False, False, True, True]


class TestTrack:
    def test_track_stores_latest_value(self):
        registry = FileRegistry()
        record = registry.add(FileRecord(name="a", blob=b"a"))
        registry.track(record.identity, 0.8)
        registry.track(record.identity, 0.3)
        assert registry.progress.get(record.identity) == 0.3

    def test_track_unknown_is_noop(self):
        registry = FileRegistry()
        assert registry.track("gone", 0.5) is False
        assert len(registry.progress) == 0

    def test_track_after_remove_is_noop(self):
        registry = FileRegistry()
        record = registry.add(FileRecord(name="a", blob=b"a"))
        registry.remove(record.identity)
        assert registry.track(record.identity, 1.0) is False

    def test_track_clamps_out_of_range(self):
        registry = FileRegistry()
        record = registry.add(FileRecord(name="a", blob=b"a"))
        registry.track(record.identity, 1.5)
        assert registry.progress.get(record.identity) == 1.0

    def test_track_ignores_nan(self):
        registry = FileRegistry()
        record = registry.add(FileRecord(name="a", blob=b"a"))
        registry.track(record.identity, 0.4)
        assert registry.track(record.identity, float("nan")) is False
        value = registry.progress.get(record.identity)
        assert not math.isnan(value)
        assert value == 0.4


class TestValidFiles:
    def test_only_valid_records(self):
        registry = FileRegistry()
        a = registry.add(FileRecord(name="a", blob=b"a"))
        registry.add(FileRecord(name="b", blob=b"b"))
        registry.update(a.identity, valid=True)
        assert [r.name for r in registry.valid_files()] == ["a"]

    def test_stable_when_progress_changes(self):
        registry = FileRegistry()
        a = registry.add(FileRecord(name="a", blob=b"a"))
        registry.update(a.identity, valid=True)
        before = registry.valid_files()

        registry.track(a.identity, 0.7)
        registry.add(FileRecord(name="b", blob=b"b"))

        after = registry.valid_files()
        assert after == before
        assert after is before

    def test_returns_immutable_snapshot(self):
        registry = FileRegistry()
        a = registry.add(FileRecord(name="a", blob=b"a"))
        registry.update(a.identity, valid=True)
        assert isinstance(registry.valid_files(), tuple)

    def test_refresh_does_not_rehash_blobs(self, monkeypatch):
        registry = FileRegistry()
        added = [registry.add(FileRecord(name=f"f{i}", blob=f"blob {i}".encode())) for i in range(20)]
        for record in added:
            registry.update(record.identity, valid=True)
        late = FileRecord(name="late", blob=b"late")

        calls = []
        original = records.content_hash
        monkeypatch.setattr(records, "content_hash", lambda blob: calls.append(blob) or original(blob))

        registry.add(late)
        registry.update(late.identity, valid=True)
        registry.move(late.identity)
        registry.remove(added[0].identity)

        assert calls == []
        assert len(registry.valid_files()) == 20

    def test_listener_only_called_on_change(self):
        registry = FileRegistry()
        calls = []
        registry.subscribe(calls.append)

        a = registry.add(FileRecord(name="a", blob=b"a"))
        registry.add(FileRecord(name="b", blob=b"b"))
        assert calls == []

        registry.update(a.identity, valid=True)
        registry.track(a.identity, 1.0)
        assert len(calls) == 1

        registry.update(a.identity, keywords=["trees"])
        assert len(calls) == 2
        assert calls[-1][0].keywords == ["trees"]

    def test_unsubscribe(self):
        registry = FileRegistry()
        calls = []
        unsubscribe = registry.subscribe(calls.append)
        unsubscribe()
        a = registry.add(FileRecord(name="a", blob=b"a"))
        registry.update(a.identity, valid=True)
        assert calls == []

    def test_update_unknown_is_noop(self):
        registry = FileRegistry()
        assert registry.update("missing", valid=True) is False

    def test_clear(self):
        registry = FileRegistry()
        a = registry.add(FileRecord(name="a", blob=b"a"))
        registry.update(a.identity, valid=True)
        registry.clear()
        assert len(registry) == 0
        assert registry.valid_files() == ()
        assert registry.capped == {}
