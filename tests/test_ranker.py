"""Tests for focus/ranker.py: next-task selection."""

from focusflow.focus.ranker import next_task, rank_tasks
from focusflow.models import TaskStatus


def test_next_task_picks_highest_priority(make_task):
    low = make_task(title="Low", priority_score=20)
    high = make_task(title="High", priority_score=90)
    mid = make_task(title="Mid", priority_score=55)
    assert next_task([low, high, mid]) is high


def test_next_task_only_considers_pending(make_task):
    busy = make_task(priority_score=99, status=TaskStatus.IN_PROGRESS)
    done = make_task(priority_score=98, status=TaskStatus.COMPLETED)
    paused = make_task(priority_score=97, status=TaskStatus.PAUSED)
    deferred = make_task(priority_score=96, status=TaskStatus.DEFERRED)
    pending = make_task(priority_score=10)

    assert next_task([busy, done, paused, deferred, pending]) is pending


def test_next_task_tie_goes_to_first_in_input(make_task):
    first = make_task(title="First", priority_score=70)
    second = make_task(title="Second", priority_score=70)
    assert next_task([first, second]) is first
    assert next_task([second, first]) is second


def test_next_task_none_without_pending(make_task):
    assert next_task([]) is None
    assert next_task([make_task(status=TaskStatus.COMPLETED)]) is None


def test_next_task_returns_member_of_input(make_task):
    tasks = [make_task(priority_score=p) for p in (5, 40, 40, 12)]
    chosen = next_task(tasks)
    assert chosen.status == TaskStatus.PENDING
    assert any(chosen is task for task in tasks)


def test_rank_tasks_orders_pending_by_priority_stably(make_task):
    a = make_task(title="A", priority_score=50)
    b = make_task(title="B", priority_score=80)
    c = make_task(title="C", priority_score=50)
    d = make_task(title="D", priority_score=90, status=TaskStatus.COMPLETED)

    assert [t.title for t in rank_tasks([a, b, c, d])] == ["B", "A", "C"]


def test_pending_pool_prefers_85_over_70(make_task):
    urgent = make_task(title="Urgent", priority_score=85, estimated_minutes=120)
    other = make_task(title="Other", priority_score=70)
    assert next_task([other, urgent]) is urgent
