"""
Touch stick engine.

Owns the sticks of one id type and runs drag arbitration once per tick:

    zones refreshed by layout -> engine.update(drag_events) -> StickEvents

For every stick, the whole batch of drag events is applied in order:

- Start claims an idle stick whose zone contains the position (Press).
- Move from the owning pointer recomputes the value.
- End from the owning pointer resets the stick to idle (Release).

After the batch, a stick that is still owned and outside its dead zone
emits Drag with its current value, whether or not it moved this tick.

Arbitration is local to each stick. If two zones overlap, a single Start
inside both claims both sticks.
"""

from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Generic, Hashable, Iterable, Iterator, List, Optional, Set, TypeVar, Union

from models import Rect, Vector2D, ZERO
from touchstick import config
from touchstick.behavior import StickBehavior
from touchstick.definitions import StickConfig
from touchstick.events import StickEvent, StickEventType
from touchstick.input.drag_event import DragEvent, DragEventType
from touchstick.logging import emit_record, ensure_sink, get_logger
from touchstick.stick import Stick

S = TypeVar('S', bound=Hashable)

log = get_logger('engine')


@dataclass(frozen=True)
class ZoneUpdate(Generic[S]):
    """Layout message: the interactable zone of one stick for this tick."""
    stick_id: S
    zone: Rect

    @classmethod
    def from_center_size(cls, stick_id: S, center: Vector2D, size: Vector2D) -> 'ZoneUpdate[S]':
        return cls(stick_id, Rect.from_center_size(center, size))


class TouchStickEngine(Generic[S]):
    """Registry and per-tick arbitration for sticks sharing one id type.

    Events are returned from update() and also kept for drain_events().
    The kept queue holds at most max_queued_events; callers that only use
    the return value can ignore it.

    Args:
        sticks: Sticks to register up front
        max_queued_events: Capacity of the drain_events() queue

    Examples:
        >>> engine = TouchStickEngine()
        >>> _ = engine.create_stick('left', behavior='fixed')
        >>> engine.set_zone('left', Rect.from_xywh(20, 500, 150, 150))
        True
        >>> events = engine.update([DragEvent.start(0, Vector2D(x=95, y=575))])
        >>> [e.kind.value for e in events]
        ['press', 'drag']
    """

    def __init__(self, sticks: Iterable[Stick[S]] = (), max_queued_events: int = config.EVENT_QUEUE_LIMIT):
        if max_queued_events < 1:
            raise ValueError(f"max_queued_events must be at least 1, got {max_queued_events}")
        self._sticks: Dict[S, Stick[S]] = {}
        # oldest events are dropped once full
        self._pending: Deque[StickEvent] = deque(maxlen=max_queued_events)
        self._overflow_warned = False
        self._degenerate: Set[S] = set()
        for stick in sticks:
            self.add_stick(stick)

    # -------------------------------------------------------------------------
    # Registry
    # -------------------------------------------------------------------------

    def add_stick(self, stick: Stick[S]) -> Stick[S]:
        """Register a stick.

        Raises:
            TypeError: If stick is not a Stick
            ValueError: If a stick with the same id is already registered
        """
        if not isinstance(stick, Stick):
            raise TypeError(f"stick must be a Stick, got {type(stick).__name__}")
        if stick.id in self._sticks:
            raise ValueError(f"Stick {stick.id!r} is already registered")
        self._sticks[stick.id] = stick
        log.debug("stick %r registered (%s)", stick.id, stick.behavior.value)
        return stick

    def create_stick(
        self,
        stick_id: S,
        behavior: Union[StickBehavior, str, None] = None,
        radius: Optional[float] = None,
        dead_zone: Optional[float] = None,
    ) -> Stick[S]:
        """Create and register a stick; omitted options use the configured defaults."""
        options = {'id': stick_id}
        if behavior is not None:
            options['behavior'] = behavior
        if radius is not None:
            options['radius'] = radius
        if dead_zone is not None:
            options['dead_zone'] = dead_zone
        return self.add_stick(Stick(**options))

    def add_from_config(self, stick_config: StickConfig) -> Stick[S]:
        return self.add_stick(Stick.from_config(stick_config))

    def remove_stick(self, stick_id: S) -> Stick[S]:
        """Unregister a stick and return it.

        Raises:
            KeyError: If no stick has this id
        """
        stick = self._sticks.pop(stick_id)
        self._degenerate.discard(stick_id)
        log.debug("stick %r removed", stick_id)
        return stick

    def get(self, stick_id: S) -> Stick[S]:
        """Look up a stick.

        Raises:
            KeyError: If no stick has this id
        """
        return self._sticks[stick_id]

    def sticks(self) -> List[Stick[S]]:
        """Registered sticks in registration order."""
        return list(self._sticks.values())

    def __contains__(self, stick_id: object) -> bool:
        return stick_id in self._sticks

    def __len__(self) -> int:
        return len(self._sticks)

    def __iter__(self) -> Iterator[Stick[S]]:
        return iter(list(self._sticks.values()))

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------

    def set_zone(self, stick_id: S, zone: Rect) -> bool:
        """Set one stick's interactable zone.

        Returns:
            False (with a warning) if no stick has this id
        """
        stick = self._sticks.get(stick_id)
        if stick is None:
            log.warning("zone update for unknown stick %r ignored", stick_id)
            return False
        stick.interactable_zone = zone
        return True

    def apply_zone_updates(self, updates: Iterable[ZoneUpdate[S]]) -> None:
        for update in updates:
            self.set_zone(update.stick_id, update.zone)

    # -------------------------------------------------------------------------
    # Tick
    # -------------------------------------------------------------------------

    def update(self, drag_events: Iterable[DragEvent]) -> List[StickEvent]:
        """Run one tick of arbitration over every stick.

        Args:
            drag_events: This tick's normalized drag events, in arrival order

        Returns:
            The stick events produced this tick (also queued for drain_events())
        """
        batch = list(drag_events)
        events: List[StickEvent] = []
        for stick in self._sticks.values():
            events.extend(self._process_stick(stick, batch))
        if not self._overflow_warned and len(self._pending) + len(events) > self._pending.maxlen:
            self._overflow_warned = True
            log.warning("event queue full (%d); oldest events dropped until drain_events()", self._pending.maxlen)
        self._pending.extend(events)
        return events

    def drain_events(self) -> List[StickEvent]:
        """Return and clear all queued stick events."""
        events = list(self._pending)
        self._pending.clear()
        self._overflow_warned = False
        return events

    def _process_stick(self, stick: Stick[S], batch: List[DragEvent]) -> List[StickEvent]:
        events: List[StickEvent] = []

        for drag in batch:
            if drag.kind == DragEventType.START:
                if stick.claim(drag.pointer_id, drag.position):
                    log.debug("stick %r pressed by pointer %d at %s", stick.id, drag.pointer_id, drag.position)
                    self._record('press', stick, drag.pointer_id)
                    events.append(StickEvent(id=stick.id, kind=StickEventType.PRESS, value=ZERO))

            elif drag.pointer_id != stick.drag_owner:
                continue

            elif drag.kind == DragEventType.MOVE:
                if stick.drag_to(drag.position):
                    self._degenerate.discard(stick.id)
                    log.trace("stick %r -> %s", stick.id, stick.value)
                elif stick.id not in self._degenerate:
                    self._degenerate.add(stick.id)
                    log.warning("stick %r has an empty zone %s; value not updated", stick.id, stick.interactable_zone)

            else:
                stick.reset()
                log.debug("stick %r released by pointer %d", stick.id, drag.pointer_id)
                self._record('release', stick, drag.pointer_id)
                events.append(StickEvent(id=stick.id, kind=StickEventType.RELEASE, value=ZERO))

        if stick.is_dragging and not stick.in_dead_zone:
            events.append(StickEvent(id=stick.id, kind=StickEventType.DRAG, value=stick.value))

        return events

    @staticmethod
    def _record(kind: str, stick: Stick, pointer_id: int) -> None:
        ensure_sink('sticks')
        emit_record('sticks', {
            'type': kind,
            'stick': str(stick.id),
            'pointer': pointer_id,
            'behavior': stick.behavior.value,
        })
