from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from timely.utils.time import format_clock, parse_start_time


class EntryKind(str, Enum):
    WORK_SESSION = "work_session"
    SHORT_BREAK = "short_break"
    LUNCH_BREAK = "lunch_break"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    EntryKind.WORK_SESSION: "Work session",
    EntryKind.SHORT_BREAK: "Short break",
    EntryKind.LUNCH_BREAK: "Lunch break",
}


class ScheduleRequest(BaseModel):
    """The validated parameters of one work day."""

    model_config = ConfigDict(frozen=True)

    name: str = ""
    work_hours: float = Field(default=7, gt=0, description="Total work hours")
    lunch_break: float = Field(default=1.5, gt=0, description="Lunch break in hours")
    short_break: float = Field(default=10, gt=0, description="Short break in minutes")
    work_session: float = Field(default=50, gt=0, description="Work session in minutes")
    start_hour: str = "09:00"

    @field_validator("start_hour")
    @classmethod
    def _check_start_hour(cls, value: str) -> str:
        parse_start_time(value)
        return value

    @property
    def total_minutes(self) -> float:
        return self.work_hours * 60


class ScheduleEntry(BaseModel):
    """One labeled block of the day."""

    model_config = ConfigDict(frozen=True)

    kind: EntryKind
    start_time: datetime
    offset_minutes: float
    duration_minutes: float

    @property
    def label(self) -> str:
        return self.kind.label

    def render(self) -> str:
        return f"{self.label} from {format_clock(self.start_time)}"


class Schedule(BaseModel):
    """A generated plan, replaced wholesale on the next submission."""

    model_config = ConfigDict(frozen=True)

    request: ScheduleRequest
    entries: tuple[ScheduleEntry, ...] = ()

    @property
    def lines(self) -> list[str]:
        return [entry.render() for entry in self.entries]

    @property
    def consumed_minutes(self) -> float:
        return sum(entry.duration_minutes for entry in self.entries)

    @property
    def has_lunch(self) -> bool:
        return any(e.kind is EntryKind.LUNCH_BREAK for e in self.entries)
