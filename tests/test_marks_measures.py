"""Tests for marks and measures."""

import logging

import pytest

from navperf.exceptions import MissingMarkError, NavPerfError
from navperf.performance import Mark, MarkStore, MeasureEngine
from navperf.testing import ManualClock


class TestMarkStore:
    """Tests for MarkStore."""

    def test_mark_and_get(self):
        """Test recording and reading a mark."""
        store = MarkStore()

        entry = store.mark("start", 12.5, {"screen": "grade1"})

        assert isinstance(entry, Mark)
        assert store.get("start") is entry
        assert entry.timestamp == 12.5
        assert entry.detail == {"screen": "grade1"}
        assert "start" in store
        assert len(store) == 1

    def test_same_name_replaces(self):
        """Test marks are unique by name."""
        store = MarkStore()

        store.mark("start", 10)
        store.mark("start", 40)

        assert len(store) == 1
        assert store.get("start").timestamp == 40

    def test_detail_is_copied(self):
        """Test later changes to the caller's dict don't leak into the mark."""
        store = MarkStore()
        detail = {"from": "home"}

        entry = store.mark("start", 0, detail)
        detail["from"] = "grade3"

        assert entry.detail == {"from": "home"}

    def test_detail_is_read_only(self):
        """Test a recorded mark's detail can't be changed."""
        entry = MarkStore().mark("start", 0, {"from": "home"})

        with pytest.raises(TypeError):
            entry.detail["from"] = "grade3"

        assert entry.detail["from"] == "home"

    def test_get_missing_returns_none(self):
        """Test get() on a missing mark."""
        assert MarkStore().get("nothing") is None

    def test_require_missing_raises(self):
        """Test require() raises MissingMarkError."""
        store = MarkStore()

        with pytest.raises(MissingMarkError) as exc:
            store.require("nothing")

        assert exc.value.markName == "nothing"
        assert isinstance(exc.value, NavPerfError)

    def test_clear_one_and_all(self):
        """Test clearing a single mark and then the store."""
        store = MarkStore()
        store.mark("a", 1)
        store.mark("b", 2)

        store.clear("a")
        assert store.names() == ["b"]

        store.clear("missing")  # no-op
        store.clear()
        assert len(store) == 0

    def test_entries_ordered_by_timestamp(self):
        """Test entries() sorts by timestamp regardless of insertion order."""
        store = MarkStore()
        store.mark("late", 30)
        store.mark("early", 10)
        store.put(Mark(name="middle", timestamp=20))

        assert [m.name for m in store.entries()] == ["early", "middle", "late"]


class TestMeasureEngine:
    """Tests for MeasureEngine."""

    @pytest.fixture
    def clock(self) -> ManualClock:
        return ManualClock(start=100.0)

    @pytest.fixture
    def store(self) -> MarkStore:
        return MarkStore()

    @pytest.fixture
    def engine(self, store: MarkStore, clock: ManualClock) -> MeasureEngine:
        return MeasureEngine(store, clock)

    def test_measure_between_marks(self, engine, store):
        """Test duration is end minus start."""
        store.mark("start", 10)
        store.mark("end", 130)

        entry = engine.measure("transition", "start", "end", {"screen": "grade1"})

        assert entry.duration == 120
        assert entry.startTime == 10
        assert entry.detail == {"screen": "grade1"}
        assert not entry.degraded

    def test_measure_to_now(self, engine, store, clock):
        """Test end=None measures up to the clock's now."""
        store.mark("start", 40)
        clock.advance(25)

        entry = engine.measure("elapsed", "start")

        assert entry.end is None
        assert entry.duration == 85

    def test_duration_never_negative(self, engine, store):
        """Test an end mark earlier than the start clamps to zero."""
        store.mark("start", 50)
        store.mark("end", 20)

        assert engine.measure("backwards", "start", "end").duration == 0

    def test_missing_start_is_degraded(self, engine, store, caplog):
        """Test a missing start mark yields a zero-duration degraded measure."""
        store.mark("end", 130)

        with caplog.at_level(logging.WARNING, logger="navperf.performance"):
            entry = engine.measure("transition", "start", "end")

        assert entry.degraded
        assert entry.duration == 0
        assert "Performance mark 'start' not found" in caplog.text

    def test_missing_end_is_degraded(self, engine, store):
        """Test a missing end mark yields a zero-duration degraded measure."""
        store.mark("start", 10)

        entry = engine.measure("transition", "start", "end")

        assert entry.degraded
        assert entry.duration == 0

    def test_history_is_bounded(self, store, clock):
        """Test only maxHistory measures are kept."""
        engine = MeasureEngine(store, clock, maxHistory=3)
        store.mark("start", 0)

        for i in range(5):
            engine.measure(f"m{i}", "start")

        assert len(engine) == 3
        assert [m.name for m in engine.getEntries()] == ["m2", "m3", "m4"]

    def test_get_entries_by_name(self, engine, store):
        """Test filtering measures by name."""
        store.mark("start", 0)
        engine.measure("a", "start")
        engine.measure("b", "start")
        engine.measure("a", "start")

        assert len(engine.getEntries("a")) == 2
        engine.clear()
        assert engine.getEntries() == []

    def test_to_dict(self, engine, store):
        """Test Measure.toDict()."""
        store.mark("start", 0)
        store.mark("end", 5)

        data = engine.measure("m", "start", "end").toDict()

        assert data["name"] == "m"
        assert data["duration"] == 5
        assert data["degraded"] is False

    def test_stored_measure_detail_is_read_only(self, engine, store):
        """Test measures kept in history can't have their detail rewritten."""
        store.mark("start", 0)
        entry = engine.measure("m", "start", detail={"screen": "grade1"})

        with pytest.raises(TypeError):
            entry.detail["screen"] = "grade2"

        assert engine.getEntries("m")[0].detail == {"screen": "grade1"}
        assert isinstance(entry.toDict()["detail"], dict)
