# trycore/core/dispatch/drivers.py
"""
Drivers for the phase state machine.

- drive_blocking: every step runs to completion in the caller's thread
- drive_suspending: awaitable step results are awaited before resuming
"""

from __future__ import annotations

from typing import Any
import inspect

from .phases import PhaseGenerator


def drive_blocking(steps: PhaseGenerator) -> Any:
    advance, payload = steps.send, None
    while True:
        try:
            step = advance(payload)
        except StopIteration as stop:
            outcome = stop.value
            break
        try:
            advance, payload = steps.send, step.invoke()
        except BaseException as exc:
            advance, payload = steps.throw, exc
    # unwrapped outside the except block so the failure keeps its own __context__
    return outcome.unwrap()


async def drive_suspending(steps: PhaseGenerator) -> Any:
    advance, payload = steps.send, None
    while True:
        try:
            step = advance(payload)
        except StopIteration as stop:
            outcome = stop.value
            break
        try:
            result = step.invoke()
            if inspect.isawaitable(result):
                result = await result
            advance, payload = steps.send, result
        except BaseException as exc:
            advance, payload = steps.throw, exc
    return outcome.unwrap()


__all__ = [
    "drive_blocking",
    "drive_suspending",
]
