"""
Shared test helpers for the fluent_result test suite.

Provides a small domain model and a factory for pending Results that
resolve on the running event loop, like a repository call would.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from itertools import count
from typing import Any, Optional

import pytest

from fluent_result import Result, StatusCode

_ids = count(1)


@dataclass(frozen=True)
class User:
    id: int
    name: str
    active: bool = True
    role_id: Optional[int] = None


def make_user(name: str = "Alice", **overrides: Any) -> User:
    """Create a User with a fresh id."""
    return User(id=next(_ids), name=name, **overrides)


async def pending(data: Any, status: StatusCode = StatusCode.SUCCESS, *messages: str) -> Result[Any]:
    """Resolve a Result after yielding to the event loop once."""
    await asyncio.sleep(0)
    return Result(data, status, messages)


@pytest.fixture()
def user() -> User:
    return make_user()
