"""Domain Types — verifies enum wire values, labels, and membership-checked parsing.

Tests:
    - Enum integer values match the wire contract
    - parse() accepts every member and rejects out-of-range integers
    - Labels are the display names used in responses
"""

import pytest

from taskboard.core.domain_types import TaskPriority, TaskStatus
from taskboard.core.errors import ValidationError


def test_status_wire_values():
    assert [s.value for s in TaskStatus] == [0, 1, 2, 3, 4]
    assert TaskStatus.COMPLETED == 3


def test_priority_wire_values_sort_by_urgency():
    assert TaskPriority.LOW < TaskPriority.MEDIUM < TaskPriority.HIGH < TaskPriority.CRITICAL


@pytest.mark.parametrize("raw", [0, 1, 2, 3, 4])
def test_status_parse_accepts_members(raw):
    assert TaskStatus.parse(raw) == raw


@pytest.mark.parametrize("raw", [-1, 5, 99])
def test_status_parse_rejects_out_of_range(raw):
    with pytest.raises(ValidationError, match="Invalid task status"):
        TaskStatus.parse(raw)


@pytest.mark.parametrize("raw", [-1, 4, 10])
def test_priority_parse_rejects_out_of_range(raw):
    with pytest.raises(ValidationError, match="Invalid task priority"):
        TaskPriority.parse(raw)


def test_labels():
    assert TaskStatus.IN_PROGRESS.label == "InProgress"
    assert TaskStatus.TODO.label == "Todo"
    assert TaskPriority.CRITICAL.label == "Critical"


@pytest.mark.parametrize("raw", [True, False, 1.0, "1", None])
def test_non_integer_wire_values_are_rejected(raw):
    assert not TaskStatus.is_valid(raw)
    assert not TaskPriority.is_valid(raw)


def test_enum_members_are_valid_input():
    assert TaskStatus.parse(TaskStatus.REVIEW) is TaskStatus.REVIEW
    assert TaskPriority.is_valid(TaskPriority.HIGH)
