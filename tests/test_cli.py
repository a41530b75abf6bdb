import json
import threading
from datetime import datetime

from typer.testing import CliRunner

from timely.cli import app, render_plan
from timely.clock import LiveClock
from timely.generator import build_schedule
from timely.schema import ScheduleRequest
from timely.settings import settings

runner = CliRunner()


def test_plan_with_defaults():
    result = runner.invoke(app, ["plan", "--no-banner", "--name", "Ada"])
    assert result.exit_code == 0, result.output
    assert "Work Plan for Ada" in result.output
    assert "Work session from 09:00 AM" in result.output
    assert "Short break from 09:50 AM" in result.output
    assert "Lunch break from 12:00 PM" in result.output
    assert "14 blocks, 7h of 7h planned." in result.output


def test_plan_with_options():
    result = runner.invoke(
        app,
        ["plan", "--no-banner", "-H", "1", "--start", "11:30"],
    )
    assert result.exit_code == 0, result.output
    assert "Work session from 11:30 AM" in result.output
    assert "Short break from 12:20 PM" in result.output
    assert "Lunch break" not in result.output


def test_unreadable_numbers_use_defaults():
    result = runner.invoke(app, ["plan", "--no-banner", "--work-session", "soon"])
    assert result.exit_code == 0, result.output
    assert "Short break from 09:50 AM" in result.output


def test_invalid_start_time():
    result = runner.invoke(app, ["plan", "--no-banner", "--start", "25:99"])
    assert result.exit_code == 1
    assert "Invalid start time" in result.output


def test_plan_json():
    result = runner.invoke(app, ["plan", "--json", "--name", "Ada", "-H", "1", "-t", "11:30"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    assert data["name"] == "Ada"
    assert [e["text"] for e in data["entries"]] == [
        "Work session from 11:30 AM",
        "Short break from 12:20 PM",
    ]
    assert data["entries"][0]["kind"] == "work_session"
    assert data["consumed_minutes"] == 60


def test_plan_banner():
    result = runner.invoke(app, ["plan", "--banner"])
    assert result.exit_code == 0, result.output
    assert "Plan. Work. Thrive." in result.output


def test_interactive_plan():
    # Name, then accept every offered default.
    result = runner.invoke(app, ["plan", "--no-banner", "-i"], input="Ada\n\n\n\n\n\n")
    assert result.exit_code == 0, result.output
    assert "Work Plan for Ada" in result.output
    assert "Lunch break from 12:00 PM" in result.output


def test_defaults_command():
    result = runner.invoke(app, ["defaults"])
    assert result.exit_code == 0, result.output
    assert "Plan Defaults" in result.output
    assert "09:00" in result.output


def test_render_plan_with_clock():
    schedule = build_schedule(ScheduleRequest(name="Ada", work_hours=1, start_hour="11:30"))
    group = render_plan(schedule, current_time="11:31:02 AM")
    texts = [str(part) for part in group.renderables]
    assert texts[0] == "11:31:02 AM"
    assert texts[1] == "Work Plan for Ada"
    assert texts[2].strip() == "• Work session from 11:30 AM"


def test_render_empty_plan():
    schedule = build_schedule(ScheduleRequest(work_hours=0.1))
    texts = [str(part) for part in render_plan(schedule).renderables]
    assert texts[-1].strip() == "No blocks fit in this work day."


def test_tiny_short_break_does_not_hang():
    result = runner.invoke(app, ["plan", "--no-banner", "--short-break", "1e-20"])
    assert result.exit_code == 0, result.output
    assert "Short break" not in result.output
    assert "Lunch break from 12:20 PM" in result.output


def test_watch_shows_clock_until_interrupted(monkeypatch):
    ticked = threading.Event()
    clocks = []

    class FixedClock(LiveClock):
        def __init__(self, on_tick, interval):
            super().__init__(on_tick, interval=interval, now=lambda: datetime(2024, 5, 6, 11, 31, 2))
            clocks.append(self)

        def tick(self):
            readout = super().tick()
            ticked.set()
            return readout

    def interrupt(_seconds):
        # Stand-in for Ctrl+C once the clock has shown a time.
        assert ticked.wait(timeout=5)
        raise KeyboardInterrupt

    monkeypatch.setattr(settings, "clock_interval_seconds", 0.01)
    monkeypatch.setattr("timely.cli.LiveClock", FixedClock)
    monkeypatch.setattr("timely.cli.time.sleep", interrupt)

    result = runner.invoke(app, ["plan", "--no-banner", "--watch", "--name", "Ada"])
    assert result.exit_code == 0, result.output
    assert "11:31:02 AM" in result.output
    assert "Work Plan for Ada" in result.output
    assert "Stopped watching." in result.output

    assert len(clocks) == 1
    assert not clocks[0].running
