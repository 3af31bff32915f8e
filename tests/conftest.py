"""
Pytest configuration and shared fixtures

Provides common work-item fixtures and board snapshots for the metrics tests.
"""

from datetime import UTC, datetime

import pytest

from kanban_metrics.domain import WorkItem


def utc(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    """Shorthand for an aware UTC datetime."""
    return datetime(year, month, day, hour, minute, second, tzinfo=UTC)


# ===== Domain Model Fixtures =====


@pytest.fixture
def make_item():
    """Factory for WorkItem with sensible defaults"""
    counter = iter(range(1, 10_000))

    def _make(**overrides) -> WorkItem:
        number = next(counter)
        fields = {"id": str(number), "name": f"Item {number}"}
        fields.update(overrides)
        return WorkItem(**fields)

    return _make


@pytest.fixture
def as_of():
    """Provide a consistent reference instant for age calculations"""
    return utc(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def completed_item(make_item):
    """Provide a completed item with all three timestamps"""
    return make_item(
        name="Checkout button",
        type="feature",
        estimate=3,
        is_completed=True,
        created_at=utc(2024, 4, 1),
        started_at=utc(2024, 4, 5),
        completed_at=utc(2024, 4, 10),
    )


@pytest.fixture
def april_may_items(make_item):
    """Two items completed in April (3 + 2 points) and two in May (5 + 1 points)"""
    return [
        make_item(
            type="feature",
            estimate=3,
            is_completed=True,
            created_at=utc(2024, 4, 1),
            started_at=utc(2024, 4, 4),
            completed_at=utc(2024, 4, 10),
        ),
        make_item(
            type="bug",
            estimate=2,
            is_completed=True,
            created_at=utc(2024, 4, 5),
            started_at=utc(2024, 4, 10),
            completed_at=utc(2024, 4, 15),
        ),
        make_item(
            type="feature",
            estimate=5,
            is_completed=True,
            created_at=utc(2024, 5, 1),
            started_at=utc(2024, 5, 2),
            completed_at=utc(2024, 5, 12),
        ),
        make_item(
            type="",
            estimate=1,
            is_completed=True,
            created_at=utc(2024, 5, 16),
            completed_at=utc(2024, 5, 18),
        ),
    ]


@pytest.fixture
def in_flight_items(make_item):
    """Incomplete items spread over workflow states"""
    return [
        make_item(name="Old review", state="In Review", created_at=utc(2024, 5, 1), started_at=utc(2024, 5, 11, 12)),
        make_item(name="Fresh review", state="In Review", created_at=utc(2024, 5, 20), started_at=utc(2024, 5, 30, 12)),
        make_item(name="Never started", state="Backlog", created_at=utc(2024, 5, 22, 12)),
        make_item(name="No state", state="", created_at=utc(2024, 5, 31, 12)),
        make_item(name="Undated", state="Backlog"),
    ]


@pytest.fixture
def mixed_board(april_may_items, in_flight_items, make_item):
    """Completed work, in-flight work and one ad-hoc request"""
    ad_hoc = make_item(
        name="Urgent export",
        type="chore",
        estimate=1,
        is_completed=True,
        labels=("AD-HOC-REQUEST",),
        created_at=utc(2024, 5, 20),
        started_at=utc(2024, 5, 20, 12),
        completed_at=utc(2024, 5, 21),
    )
    return [*april_may_items, ad_hoc, *in_flight_items]


# ===== Ingestion Fixtures =====


BOARD_CSV_HEADER = "id,name,type,owners,estimate,is_completed,labels,state,created_at,started_at,completed_at,team"


@pytest.fixture
def board_csv(tmp_path):
    """Write a small comma-delimited board export and return its path"""
    rows = [
        BOARD_CSV_HEADER,
        '101,Login page,feature,"alice,bob",3,TRUE,,Done,2024/04/01 09:00:00,2024/04/03 09:00:00,2024/04/10 17:00:00,Web',
        '102,Fix crash,bug,carol,2,true,"ad-hoc-request,urgent",Done,2024/04/05 10:00:00,,2024/04/08 10:00:00,Mobile',
        "103,Refactor,chore,,,FALSE,,In Progress,2024/05/01 08:00:00,2024/05/02 08:00:00,,Web",
        ",Missing id,feature,,1,TRUE,,Done,2024/04/01 09:00:00,,2024/04/02 09:00:00,Web",
    ]
    path = tmp_path / "board.csv"
    path.write_text("\n".join(rows) + "\n", encoding="utf-8")
    return path
