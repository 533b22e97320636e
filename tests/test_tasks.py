"""Tests for core task logic."""

from datetime import date

import pytest

from studyweek.core.tasks import Task, filter_incomplete, parse_due_date


class TestParseDueDate:
    def test_iso_date(self):
        assert parse_due_date("2025-01-20") == date(2025, 1, 20)

    def test_iso_timestamp(self):
        assert parse_due_date("2025-01-20T23:59:00.000Z") == date(2025, 1, 20)

    @pytest.mark.parametrize("value", [None, "", "TBD", "tbd", "  "])
    def test_undated_values(self, value):
        assert parse_due_date(value) is None

    def test_date_passes_through(self):
        assert parse_due_date(date(2025, 3, 1)) == date(2025, 3, 1)

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            parse_due_date("next tuesday")


class TestTask:
    def test_effort_defaults_to_one_hour(self):
        task = Task(id="1", title="Read", due_date=None)
        assert task.effort_hours == 1

    def test_effort_zero_defaults_to_one_hour(self):
        task = Task(id="1", title="Read", due_date=None, estimated_hours=0)
        assert task.effort_hours == 1

    def test_effort_uses_estimate(self):
        task = Task(id="1", title="Read", due_date=None, estimated_hours=2.5)
        assert task.effort_hours == 2.5

    def test_from_dict(self):
        data = {
            "id": "abc123",
            "title": "Chemistry problem set",
            "dueDate": "2025-01-20",
            "estimatedHours": 3,
            "completed": False,
            "notes": "Chapters 4-5",
            "activityId": "chem",
        }
        task = Task.from_dict(data)

        assert task.id == "abc123"
        assert task.title == "Chemistry problem set"
        assert task.due_date == date(2025, 1, 20)
        assert task.estimated_hours == 3.0
        assert task.completed is False
        assert task.notes == "Chapters 4-5"
        assert task.activity_id == "chem"

    def test_from_dict_undated(self):
        task = Task.from_dict({"id": "1", "title": "Someday", "dueDate": "TBD"})

        assert task.due_date is None
        assert task.is_undated
        assert task.estimated_hours is None
        assert task.notes is None

    def test_from_dict_null_title(self):
        task = Task.from_dict({"id": "1", "title": None, "dueDate": "TBD"})
        assert task.title == ""

    def test_to_dict_round_trips_undated_marker(self):
        task = Task(id="1", title="Someday", due_date=None)
        assert task.to_dict()["dueDate"] == "TBD"
        assert Task.from_dict(task.to_dict()) == task


class TestFilterIncomplete:
    def test_drops_completed(self):
        tasks = [
            Task(id="1", title="Done", due_date=None, completed=True),
            Task(id="2", title="Open", due_date=None),
        ]
        assert [t.id for t in filter_incomplete(tasks)] == ["2"]

    def test_empty(self):
        assert filter_incomplete([]) == []
