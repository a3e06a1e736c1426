"""Tests for the TouchStickEngine."""

import pytest

from models import Rect, Vector2D, ZERO
from touchstick import logging as ts_logging
from touchstick.definitions import StickConfig
from touchstick.engine import TouchStickEngine, ZoneUpdate
from touchstick.events import StickEvent, StickEventType
from touchstick.input.drag_event import DragEvent
from touchstick.stick import Stick

PRESS = StickEventType.PRESS
DRAG = StickEventType.DRAG
RELEASE = StickEventType.RELEASE


def vec(x, y):
    return Vector2D(x=float(x), y=float(y))


def kinds(events):
    return [e.kind for e in events]


class RecordingSink(ts_logging.LogSink):
    """Sink that keeps records in memory."""

    def __init__(self):
        self.records = []

    def emit(self, module, record):
        self.records.append((module, record))

    def flush(self):
        pass

    def close(self):
        pass


class TestRegistry:
    """Tests for stick registration."""

    def test_create_stick(self, engine):
        """Created sticks are registered and retrievable."""
        stick = engine.create_stick('left', behavior='fixed', dead_zone=0.2)
        assert engine.get('left') is stick
        assert 'left' in engine
        assert len(engine) == 1
        assert stick.dead_zone == 0.2

    def test_create_stick_uses_defaults(self, engine):
        stick = engine.create_stick('left')
        assert stick.radius == 75.0
        assert stick.dead_zone == 0.0

    def test_duplicate_id_rejected(self, engine):
        engine.create_stick('left')
        with pytest.raises(ValueError, match="already registered"):
            engine.create_stick('left')

    def test_add_stick_type_checked(self, engine):
        with pytest.raises(TypeError):
            engine.add_stick('left')

    def test_add_from_config(self, engine):
        stick = engine.add_from_config(StickConfig(id=7, behavior='dynamic'))
        assert engine.get(7) is stick

    def test_remove_stick(self, engine):
        engine.create_stick('left')
        removed = engine.remove_stick('left')
        assert removed.id == 'left'
        assert 'left' not in engine

    def test_unknown_stick_raises_key_error(self, engine):
        with pytest.raises(KeyError):
            engine.get('nope')
        with pytest.raises(KeyError):
            engine.remove_stick('nope')

    def test_iteration_in_registration_order(self, engine):
        for stick_id in ('c', 'a', 'b'):
            engine.create_stick(stick_id)
        assert [s.id for s in engine] == ['c', 'a', 'b']
        assert [s.id for s in engine.sticks()] == ['c', 'a', 'b']

    def test_constructor_accepts_sticks(self):
        engine = TouchStickEngine([Stick(id=1), Stick(id=2)])
        assert len(engine) == 2

    def test_enum_ids(self):
        """Any hashable value works as an id."""
        from enum import Enum

        class Side(Enum):
            LEFT = 1
            RIGHT = 2

        engine = TouchStickEngine()
        engine.create_stick(Side.LEFT)
        engine.create_stick(Side.RIGHT)
        assert engine.get(Side.RIGHT).id is Side.RIGHT


class TestZones:
    """Tests for zone updates."""

    def test_set_zone(self, engine, zone):
        engine.create_stick('left')
        assert engine.set_zone('left', zone)
        assert engine.get('left').interactable_zone == zone

    def test_set_zone_unknown_stick(self, engine, zone):
        """Updates for unknown sticks are skipped."""
        assert not engine.set_zone('ghost', zone)

    def test_apply_zone_updates(self, engine):
        engine.create_stick('a')
        engine.create_stick('b')
        engine.apply_zone_updates([
            ZoneUpdate('a', Rect.from_xywh(0, 0, 10, 10)),
            ZoneUpdate.from_center_size('b', vec(50, 50), vec(20, 20)),
            ZoneUpdate('ghost', Rect.from_xywh(0, 0, 1, 1)),
        ])
        assert engine.get('a').interactable_zone == Rect.from_xywh(0, 0, 10, 10)
        assert engine.get('b').interactable_zone.center == vec(50, 50)


class TestArbitrationScenarios:
    """End-to-end tick scenarios."""

    @pytest.fixture
    def fixed(self, engine, zone):
        stick = engine.create_stick('s', behavior='fixed')
        engine.set_zone('s', zone)
        return stick

    def test_fixed_press_drag_release(self, engine, fixed):
        """Press, full right drag, release."""
        events = engine.update([DragEvent.start(0, vec(0, 0))])
        assert events[0] == StickEvent(id='s', kind=PRESS, value=ZERO)

        events = engine.update([DragEvent.move(0, vec(75, 0))])
        assert kinds(events) == [DRAG]
        assert events[0].value.x == pytest.approx(1.0)
        assert events[0].value.y == pytest.approx(0.0)

        events = engine.update([DragEvent.end(0)])
        assert events == [StickEvent(id='s', kind=RELEASE, value=ZERO)]
        assert fixed.drag_owner is None
        assert fixed.value == ZERO

    def test_press_tick_with_zero_dead_zone_also_drags(self, engine, fixed):
        """With dead zone 0 the zero value is not inside the dead zone."""
        events = engine.update([DragEvent.start(0, vec(0, 0))])
        assert kinds(events) == [PRESS, DRAG]
        assert events[1].value == ZERO

    def test_dead_zone_gates_drag(self, engine, zone):
        """Small offsets inside the dead zone emit no Drag."""
        stick = engine.create_stick('s', behavior='fixed', dead_zone=0.1)
        engine.set_zone('s', zone)
        assert kinds(engine.update([DragEvent.start(0, vec(0, 0))])) == [PRESS]

        events = engine.update([DragEvent.move(0, vec(3, 0))])
        assert events == []
        assert stick.value.x == pytest.approx(0.04)

    def test_drag_repeats_without_move(self, engine, fixed):
        """Drag fires every tick while held outside the dead zone."""
        engine.update([DragEvent.start(0, vec(0, 0)), DragEvent.move(0, vec(30, 0))])
        for _ in range(3):
            events = engine.update([])
            assert kinds(events) == [DRAG]
            assert events[0].value.x == pytest.approx(0.4)

    def test_dynamic_anchor_slide(self, engine, zone):
        stick = engine.create_stick('s', behavior='dynamic')
        engine.set_zone('s', zone)
        engine.update([DragEvent.start(0, vec(0, 0))])
        events = engine.update([DragEvent.move(0, vec(150, 0))])
        assert stick.drag_start_position == vec(75, 0)
        assert events[-1].value.x == pytest.approx(1.0)

    def test_start_outside_zone_ignored(self, engine, fixed):
        assert engine.update([DragEvent.start(0, vec(500, 500))]) == []
        assert fixed.drag_owner is None

    def test_no_steal(self, engine, fixed):
        """A second pointer cannot take over a held stick."""
        engine.update([DragEvent.start(1, vec(0, 0))])
        events = engine.update([DragEvent.start(2, vec(10, 10))])
        assert PRESS not in kinds(events)
        assert fixed.drag_owner == 1

    def test_foreign_move_and_end_ignored(self, engine, fixed):
        engine.update([DragEvent.start(1, vec(0, 0))])
        events = engine.update([DragEvent.move(2, vec(75, 0)), DragEvent.end(2)])
        assert kinds(events) == [DRAG]
        assert events[0].value == ZERO
        assert fixed.drag_owner == 1

    def test_press_and_release_same_tick(self, engine, fixed):
        """A tap within one tick gives Press then Release and no Drag."""
        events = engine.update([
            DragEvent.start(0, vec(0, 0)),
            DragEvent.move(0, vec(40, 0)),
            DragEvent.end(0),
        ])
        assert kinds(events) == [PRESS, RELEASE]

    def test_release_then_new_owner_same_tick(self, engine, fixed):
        """After a release another pointer can claim in the same batch."""
        engine.update([DragEvent.start(1, vec(0, 0))])
        events = engine.update([DragEvent.end(1), DragEvent.start(2, vec(5, 5))])
        assert kinds(events) == [RELEASE, PRESS, DRAG]
        assert fixed.drag_owner == 2

    def test_move_outside_zone_keeps_drag(self, engine, fixed):
        """Moves are not clipped to the zone."""
        engine.update([DragEvent.start(0, vec(0, 0))])
        events = engine.update([DragEvent.move(0, vec(0, 1000))])
        assert events[0].value == vec(0, -1)
        assert fixed.drag_owner == 0

    def test_two_sticks_two_pointers(self, engine):
        """Independent pointers drive independent sticks."""
        left = engine.create_stick('left', behavior='fixed')
        right = engine.create_stick('right', behavior='fixed')
        engine.set_zone('left', Rect.from_center_size(vec(100, 500), vec(150, 150)))
        engine.set_zone('right', Rect.from_center_size(vec(700, 500), vec(150, 150)))

        engine.update([DragEvent.start(1, vec(100, 500)), DragEvent.start(2, vec(700, 500))])
        engine.update([DragEvent.move(1, vec(25, 500)), DragEvent.move(2, vec(700, 425))])

        assert left.drag_owner == 1 and right.drag_owner == 2
        assert left.value.x == pytest.approx(-1.0)
        assert right.value.y == pytest.approx(1.0)

    def test_overlapping_zones_both_claim(self, engine, zone):
        """Arbitration is per stick, so overlapping zones share a pointer."""
        engine.create_stick('a', behavior='fixed')
        engine.create_stick('b', behavior='fixed')
        engine.set_zone('a', zone)
        engine.set_zone('b', zone)
        events = engine.update([DragEvent.start(4, vec(0, 0))])
        presses = [e.id for e in events if e.kind == PRESS]
        assert presses == ['a', 'b']

    def test_degenerate_zone_keeps_ownership(self, engine):
        """An empty zone skips the value update without ending the drag."""
        stick = engine.create_stick('s', behavior='fixed', dead_zone=0.5)
        engine.set_zone('s', Rect.from_xywh(10, 10, 0, 0))
        engine.update([DragEvent.start(0, vec(10, 10))])
        assert engine.update([DragEvent.move(0, vec(90, 10))]) == []
        assert stick.drag_owner == 0
        assert stick.value == ZERO

    def test_degenerate_zone_warns_once(self, engine, capsys):
        ts_logging.configure_logging(level='WARNING')
        engine.create_stick('s', behavior='fixed')
        engine.set_zone('s', Rect.from_xywh(10, 10, 0, 0))
        engine.update([DragEvent.start(0, vec(10, 10))])
        engine.update([DragEvent.move(0, vec(11, 10))])
        engine.update([DragEvent.move(0, vec(12, 10))])
        out = capsys.readouterr().out
        assert out.count("empty zone") == 1

    def test_events_ordered_by_stick_registration(self, engine):
        engine.create_stick('b', behavior='fixed')
        engine.create_stick('a', behavior='fixed')
        engine.set_zone('b', Rect.from_xywh(0, 0, 10, 10))
        engine.set_zone('a', Rect.from_xywh(100, 0, 10, 10))
        events = engine.update([DragEvent.start(1, vec(105, 5)), DragEvent.start(2, vec(5, 5))])
        assert [e.id for e in events if e.kind == PRESS] == ['b', 'a']


class TestDrain:
    """Tests for the polled event queue."""

    def test_drain_collects_ticks(self, engine, zone):
        engine.create_stick('s', behavior='fixed', dead_zone=0.5)
        engine.set_zone('s', zone)
        engine.update([DragEvent.start(0, vec(0, 0))])
        engine.update([DragEvent.end(0)])
        assert kinds(engine.drain_events()) == [PRESS, RELEASE]
        assert engine.drain_events() == []

    def test_queue_is_bounded(self, zone):
        """Undrained events are capped, keeping the newest ones."""
        engine = TouchStickEngine(max_queued_events=5)
        engine.create_stick('s', behavior='fixed')
        engine.set_zone('s', zone)
        engine.update([DragEvent.start(0, vec(0, 0))])
        for x in range(1, 21):
            engine.update([DragEvent.move(0, vec(x, 0))])

        queued = engine.drain_events()
        assert len(queued) == 5
        assert kinds(queued) == [DRAG] * 5
        assert queued[-1].value.x == pytest.approx(20 / 75)

    def test_queue_overflow_warns_once(self, zone, capsys):
        ts_logging.configure_logging(level='WARNING')
        engine = TouchStickEngine(max_queued_events=2)
        engine.create_stick('s', behavior='fixed')
        engine.set_zone('s', zone)
        engine.update([DragEvent.start(0, vec(0, 0))])
        for _ in range(10):
            engine.update([])
        assert capsys.readouterr().out.count("event queue full") == 1

    def test_update_returns_events_even_when_queue_full(self, zone):
        engine = TouchStickEngine(max_queued_events=1)
        engine.create_stick('s', behavior='fixed')
        engine.set_zone('s', zone)
        assert kinds(engine.update([DragEvent.start(0, vec(0, 0))])) == [PRESS, DRAG]

    @pytest.mark.parametrize("limit", [0, -3])
    def test_queue_limit_must_be_positive(self, limit):
        with pytest.raises(ValueError, match="max_queued_events"):
            TouchStickEngine(max_queued_events=limit)


class TestStructuredRecords:
    """Tests for press/release records."""

    def test_press_and_release_recorded(self, engine, zone):
        sink = RecordingSink()
        ts_logging.register_sink('sticks', sink)
        engine.create_stick('s', behavior='fixed')
        engine.set_zone('s', zone)
        engine.update([DragEvent.start(3, vec(0, 0))])
        engine.update([DragEvent.end(3)])

        assert [r['type'] for _, r in sink.records] == ['press', 'release']
        module, press = sink.records[0]
        assert module == 'sticks'
        assert press == {'type': 'press', 'stick': 's', 'pointer': 3, 'behavior': 'fixed'}
