"""Shared fixtures for tdv_app tests."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def people() -> list[dict[str, Any]]:
    names = [
        ("Alice Smith", "Engineering", "2023-04-01", 34),
        ("Bob Jones", "Sales", "2021-11-15", 45),
        ("Carla Diaz", "Engineering", "2022-01-20", 29),
        ("Dan Brown", "Support", None, 51),
    ]
    rows = []
    for idx, (name, dept, joined, age) in enumerate(names, start=1):
        rows.append(
            {
                "id": idx,
                "name": name,
                "department": {"name": dept},
                "joined": joined,
                "age": age,
            }
        )
    return rows


@pytest.fixture
def many_rows() -> list[dict[str, Any]]:
    return [{"id": i, "name": f"user {i:02d}", "score": i % 7} for i in range(1, 26)]
