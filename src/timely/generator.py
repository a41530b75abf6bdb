"""
Expands a day's work parameters into an ordered list of labeled blocks.

The day is simulated block by block over a small immutable state record
(elapsed minutes, wall-clock cursor, whether lunch has been taken):

1. Lunch takes priority once the cursor sits in the 12:xx or 13:xx hour,
   provided it has not been taken yet and still fits in the day.
2. Otherwise a work session is placed if it fits, then a short break if it
   fits. Both can land in the same round.
3. A round that places nothing ends the day early with whatever was placed.
"""

import math
from collections.abc import Iterable, Iterator
from datetime import datetime

from loguru import logger
from pydantic import BaseModel, ConfigDict

from timely.schema import EntryKind, Schedule, ScheduleEntry, ScheduleRequest
from timely.utils.time import advance, anchor, format_clock, parse_start_time

LUNCH_HOURS = (12, 13)


class GeneratorState(BaseModel):
    model_config = ConfigDict(frozen=True)

    elapsed_minutes: float = 0
    cursor: datetime
    lunch_taken: bool = False

    def advances(self, minutes: float) -> bool:
        """Whether a block of ``minutes`` actually moves the elapsed counter."""
        return self.elapsed_minutes + minutes > self.elapsed_minutes

    def fits(self, minutes: float, total_minutes: float) -> bool:
        """Whether a block of ``minutes`` can still be placed in the day."""
        return self.advances(minutes) and self.elapsed_minutes + minutes <= total_minutes

    def lunch_window_open(self) -> bool:
        return not self.lunch_taken and self.cursor.hour in LUNCH_HOURS

    def place(self, kind: EntryKind, minutes: float) -> ScheduleEntry:
        return ScheduleEntry(
            kind=kind,
            start_time=self.cursor,
            offset_minutes=self.elapsed_minutes,
            duration_minutes=minutes,
        )

    def step(self, minutes: float, **update) -> "GeneratorState":
        return self.model_copy(
            update={
                "elapsed_minutes": self.elapsed_minutes + minutes,
                "cursor": advance(self.cursor, minutes),
                **update,
            }
        )


def _simulate(
    state: GeneratorState,
    total_minutes: float,
    lunch_minutes: float,
    short_minutes: float,
    session_minutes: float,
) -> Iterator[ScheduleEntry]:
    if not math.isfinite(total_minutes):
        logger.warning(f"Work day of {total_minutes} minutes cannot be planned.")
        return

    while state.elapsed_minutes < total_minutes:
        if state.lunch_window_open() and state.fits(lunch_minutes, total_minutes):
            yield state.place(EntryKind.LUNCH_BREAK, lunch_minutes)
            logger.debug(f"Lunch break at {format_clock(state.cursor)}")
            state = state.step(lunch_minutes, lunch_taken=True)
            continue

        if not state.advances(session_minutes):
            logger.warning(
                f"Work session of {session_minutes} minutes never advances the day; "
                "stopping."
            )
            return

        progressed = False
        if state.fits(session_minutes, total_minutes):
            yield state.place(EntryKind.WORK_SESSION, session_minutes)
            logger.debug(f"Work session at {format_clock(state.cursor)}")
            state = state.step(session_minutes)
            progressed = True

        if state.fits(short_minutes, total_minutes):
            yield state.place(EntryKind.SHORT_BREAK, short_minutes)
            logger.debug(f"Short break at {format_clock(state.cursor)}")
            state = state.step(short_minutes)
            progressed = True

        if not progressed:
            logger.debug(
                f"Nothing fits in the remaining "
                f"{total_minutes - state.elapsed_minutes:g} minutes; stopping."
            )
            return


def iter_entries(
    work_hours: float,
    lunch_break: float,
    short_break: float,
    work_session: float,
    start_hour: str,
) -> Iterator[ScheduleEntry]:
    """
    Lazily yields the day's entries in chronological order.

    The start hour is parsed up front so a malformed value fails before any
    entry is produced.

    Raises:
        InvalidStartTimeError: If ``start_hour`` is not a valid HH:MM time.
    """
    start = parse_start_time(start_hour)
    return _simulate(
        GeneratorState(cursor=anchor(start)),
        total_minutes=work_hours * 60,
        lunch_minutes=lunch_break * 60,
        short_minutes=short_break,
        session_minutes=work_session,
    )


def generate(
    work_hours: float,
    lunch_break: float,
    short_break: float,
    work_session: float,
    start_hour: str,
) -> tuple[ScheduleEntry, ...]:
    """
    Builds the full ordered schedule for one work day.

    Args:
        work_hours: Total length of the day in hours.
        lunch_break: Lunch length in hours.
        short_break: Short break length in minutes.
        work_session: Work session length in minutes.
        start_hour: Wall-clock start, "HH:MM" in 24h.
    """
    entries = tuple(
        iter_entries(work_hours, lunch_break, short_break, work_session, start_hour)
    )
    logger.debug(f"Generated {len(entries)} entries starting at {start_hour}")
    return entries


def build_schedule(request: ScheduleRequest) -> Schedule:
    """Generates the schedule for a validated request."""
    entries = generate(
        request.work_hours,
        request.lunch_break,
        request.short_break,
        request.work_session,
        request.start_hour,
    )
    return Schedule(request=request, entries=entries)


def describe(entries: Iterable[ScheduleEntry]) -> list[str]:
    """Renders entries as display strings, e.g. 'Work session from 09:00 AM'."""
    return [entry.render() for entry in entries]
