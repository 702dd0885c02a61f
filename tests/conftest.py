"""Shared test fixtures."""

from __future__ import annotations

import asyncio

import pytest

from splitflap import Alphabet, BoardConfig

LETTERS = " ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def run(coro):
    """Run a coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)


@pytest.fixture
def letters() -> Alphabet:
    return Alphabet(LETTERS)


@pytest.fixture
def board_config() -> BoardConfig:
    # 20x20 flaps with 5px gaps at scale 1.0, no delay between flips
    return BoardConfig(
        base_cell_width=20,
        base_cell_height=20,
        base_spacing=5,
        step_interval=0,
    )
