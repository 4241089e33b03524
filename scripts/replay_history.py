#!/usr/bin/env python3
"""
Replay a session history and print its analytics

Usage:
    python scripts/replay_history.py sessions.json [--now 2024-05-01T12:00:00]

Arguments:
    history: JSON file holding an array of focus sessions (camelCase or snake_case keys)
    --now: Reference time for streaks and day series (default: current time)
"""

import argparse
import json
import sys
from datetime import datetime
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from focusflow.analytics import aggregate, get_productivity_level, score_breakdown
from focusflow.models import FocusSession

_sessions_adapter = TypeAdapter(list[FocusSession])


def load_sessions(path: Path) -> list[FocusSession]:
    with open(path, "r", encoding="utf-8") as f:
        return _sessions_adapter.validate_python(json.load(f))


def print_sessions(sessions: list[FocusSession]) -> None:
    print("=" * 80)
    print("SESSIONS")
    print("=" * 80)

    for i, session in enumerate(sessions, 1):
        breakdown = score_breakdown(session)
        print(f"Session #{i} ({session.id})")
        print(f"  Task: {session.task_id}")
        print(f"  Start: {session.start_time.isoformat()}")
        print(f"  Outcome: {session.outcome.value}")
        print(
            f"  Duration: {session.actual_duration_minutes}/"
            f"{session.intended_duration_minutes} min"
        )
        print(f"  Interruptions: {session.interruptions_count}")
        print(
            f"  Score: {breakdown.score:.1f} ({get_productivity_level(breakdown.score)}) "
            f"[completion={breakdown.completion_score:.2f}, "
            f"focus={breakdown.focus_score:.2f}, "
            f"duration={breakdown.duration_score:.2f}]"
        )
        print()


def print_stats(sessions: list[FocusSession], now: datetime) -> None:
    stats = aggregate(sessions, now=now)

    print("=" * 80)
    print("PROGRESS")
    print("=" * 80)
    print(f"  Total sessions: {stats.total_sessions}")
    print(f"  Completed sessions: {stats.completed_sessions}")
    print(f"  Total focus time: {stats.total_focus_time} min")
    print(f"  Average session length: {stats.average_session_length:.1f} min")
    print(f"  Completion rate: {stats.completion_rate:.1f}%")
    print(f"  Current streak: {stats.current_streak}")
    print(f"  Longest streak: {stats.longest_streak}")
    print(f"  Productivity score: {stats.productivity_score:.1f}")
    print(f"  Last 7 days: {stats.weekly_focus_time}")
    print(f"  Last 30 days: {stats.monthly_focus_time}")


def main():
    parser = argparse.ArgumentParser(description="Replay a focus session history")
    parser.add_argument("history", type=Path, help="Path to a JSON array of sessions")
    parser.add_argument(
        "--now",
        type=datetime.fromisoformat,
        default=None,
        help="Reference time (ISO format) for streaks and day series",
    )

    args = parser.parse_args()

    if not args.history.exists():
        print(f"History file not found: {args.history}")
        sys.exit(1)

    try:
        sessions = load_sessions(args.history)
    except (json.JSONDecodeError, ValidationError) as e:
        print(f"Invalid history file: {e}")
        sys.exit(1)

    print_sessions(sessions)
    print_stats(sessions, args.now or datetime.now())


if __name__ == "__main__":
    main()
