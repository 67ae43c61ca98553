import math
import re
from typing import List, Optional, Tuple

from .config import DEFAULT_CONFIG, SchedulerConfig
from .models import TimeSlot, hour_range_label

_LABEL_RE = re.compile(
    r"^Day (?P<day>\d+), Slot (?P<slot>\d+) "
    r"\((?P<start>\d+(?:\.\d+)?):00-(?P<end>\d+(?:\.\d+)?):00\)$"
)


def _hour(text: str) -> float:
    value = float(text)
    return int(value) if value.is_integer() else value


def generate_time_slots(days: int, config: Optional[SchedulerConfig] = None) -> List[TimeSlot]:
    """Day-major, then time-major; a slot is kept only if it ends by day_end."""
    cfg = config or DEFAULT_CONFIG
    slots: List[TimeSlot] = []
    for day in range(1, days + 1):
        current = cfg.day_start
        k = 1
        while current + cfg.exam_duration_hours <= cfg.day_end:
            slots.append(TimeSlot(day=day, slot=k, start=current, end=current + cfg.exam_duration_hours))
            current += cfg.exam_duration_hours + cfg.break_hours
            k += 1
    return slots


def slots_per_day(config: Optional[SchedulerConfig] = None) -> int:
    return len(generate_time_slots(1, config))


def parse_slot_label(label: str) -> Optional[TimeSlot]:
    """Inverse of ``TimeSlot.label``; None when the label is not in that format."""
    m = _LABEL_RE.match(label.strip())
    if m is None:
        return None
    return TimeSlot(
        day=int(m.group("day")),
        slot=int(m.group("slot")),
        start=_hour(m.group("start")),
        end=_hour(m.group("end")),
    )


def invigilation_window(slot: TimeSlot, config: Optional[SchedulerConfig] = None) -> Tuple[int, int]:
    """Whole-hour window invigilated for an exam slot.

    Starts on the first full hour at or after the exam start and lasts the
    exam's length in whole hours, clamped to the end of the day. With the
    default day this gives 9-12 for the first slot and 13-16 for the second.
    """
    cfg = config or DEFAULT_CONFIG
    start = int(math.ceil(slot.start))
    end = min(start + int(round(slot.end - slot.start)), int(cfg.day_end))
    return start, end


def hourly_subslots(start: int, end: int) -> List[Tuple[int, int]]:
    return [(h, h + 1) for h in range(start, end)]


def subslot_label(start: int, end: int) -> str:
    return hour_range_label(start, end)
