# tests/conftest.py
from __future__ import annotations

import os
import random
from pathlib import Path

import matplotlib
import numpy as np
import pytest

matplotlib.use("Agg", force=True)

from timeoff.models import Division, Employee, TimeOffEvent  # noqa: E402


# -----------------------------
# Global, deterministic seeding
# -----------------------------
@pytest.fixture(autouse=True, scope="session")
def _seed_everything() -> None:
    """
    Make tests deterministic across runs. If you need a different seed in a test,
    override locally.
    """
    seed = int(os.environ.get("PYTEST_SEED", "1234"))
    os.environ["PYTHONHASHSEED"] = str(seed)
    random.seed(seed)
    if np is not None:  # pragma: no branch
        np.random.seed(seed)


# -----------------------------
# Path helpers
# -----------------------------
@pytest.fixture(scope="session")
def project_root() -> Path:
    """Repository root (where pyproject.toml lives)."""
    return Path(__file__).resolve().parents[1]


# -----------------------------
# Snapshot fixtures
# -----------------------------
@pytest.fixture
def divisions() -> list[Division]:
    return [Division(id="d1", name="Eng"), Division(id="d2", name="Ops")]


@pytest.fixture
def employees() -> list[Employee]:
    return [
        Employee(id="e1", full_name="Alice Smith", division_id="d1"),
        Employee(id="e2", full_name="Bob Jones", division_id="d1"),
        Employee(id="e3", full_name="Carol White", division_id="d2"),
        Employee(id="e4", full_name="Dan Brown", division_id="d2"),
    ]


@pytest.fixture
def events() -> list[TimeOffEvent]:
    return [
        TimeOffEvent(
            id="ev1",
            employee_id="e1",
            division_id="d1",
            category="VACATION",
            start_date="2024-06-03",
            end_date="2024-06-07",
        ),
        TimeOffEvent(
            id="ev2",
            employee_id="e2",
            division_id="d1",
            category="SICK",
            start_date="2024-06-05",
            end_date="2024-06-06",
        ),
        # e3 temporarily booked against d1
        TimeOffEvent(
            id="ev3",
            employee_id="e3",
            division_id="d1",
            category="UNPAID",
            start_date="2024-06-06",
            end_date="2024-06-06",
        ),
        TimeOffEvent(
            id="ev4",
            employee_id="e1",
            division_id="d1",
            category="OTHER",
            start_date="2024-06-06",
            end_date="2024-06-10",
        ),
    ]
