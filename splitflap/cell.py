"""
CellAnimator - Stepping animation for a single split-flap cell
Walks the displayed symbol forward through the alphabet, one flip per step,
until it reaches the most recently requested target.
"""

import asyncio
import logging
from typing import Callable, List, Optional

from .alphabet import Alphabet, DEFAULT_ALPHABET, SPACE
from .rotation import rotation_sequence

StepCallback = Callable[[int, str], None]


class CellAnimator:
    """Owns one cell's displayed symbol, target and in-flight flip task"""

    def __init__(self, index: int, step_interval: float = 0.03,
                 alphabet: Alphabet = DEFAULT_ALPHABET,
                 on_step: Optional[StepCallback] = None,
                 symbol: str = SPACE):
        self.index = index
        self.step_interval = step_interval
        self.alphabet = alphabet
        self.on_step = on_step

        # Displayed and requested symbols
        self.current_symbol = symbol
        self.target_symbol = symbol

        # Bumped on every new target; a step only commits while its generation is current
        self._generation = 0
        self._task: Optional[asyncio.Task] = None

    def set_target(self, symbol: str) -> bool:
        """
        Request a new target symbol.

        Any sequence still running is cancelled and a fresh one starts from the
        symbol currently on display. Must be called from a running event loop.

        Returns:
            True if the target changed
        """
        if symbol == self.target_symbol:
            return False

        # Raises outside a running loop, before the target is recorded
        loop = asyncio.get_running_loop()

        if self.is_animating:
            logging.debug(f"Flap {self.index} retargeted to {symbol!r} at {self.current_symbol!r}")

        self.target_symbol = symbol
        self._cancel_task()

        sequence = rotation_sequence(self.current_symbol, symbol, self.alphabet)
        if sequence:
            self._task = loop.create_task(
                self._step_through(self._generation, sequence),
                name=f"flap-{self.index}",
            )
        return True

    async def _step_through(self, generation: int, sequence: List[str]) -> None:
        """Display each symbol of the sequence, pausing between flips"""
        last = len(sequence) - 1
        for position, symbol in enumerate(sequence):
            if generation != self._generation:
                return

            self.current_symbol = symbol
            self._notify(symbol)

            if position < last:
                await asyncio.sleep(self.step_interval)

        if generation == self._generation:
            self._task = None

    def _notify(self, symbol: str) -> None:
        if self.on_step is not None:
            self.on_step(self.index, symbol)

    def _cancel_task(self) -> None:
        self._generation += 1
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def cancel(self) -> None:
        """Stop flipping, leaving the currently displayed symbol in place"""
        self._cancel_task()
        self.target_symbol = self.current_symbol

    def snap(self) -> None:
        """Jump straight to the target without flipping"""
        self._cancel_task()
        if self.current_symbol != self.target_symbol:
            self.current_symbol = self.target_symbol
            self._notify(self.current_symbol)

    @property
    def task(self) -> Optional[asyncio.Task]:
        return self._task

    @property
    def is_animating(self) -> bool:
        """Check if a flip sequence is currently running"""
        return self._task is not None and not self._task.done()

    def __repr__(self) -> str:
        state = "stepping" if self.is_animating else "idle"
        return (f"CellAnimator(index={self.index}, current={self.current_symbol!r}, "
                f"target={self.target_symbol!r}, {state})")
