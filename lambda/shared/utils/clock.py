"""
Clock - fonte de tempo injetável
Permite testes determinísticos de TTL com relógio virtual
"""
import time
from typing import Protocol


class Clock(Protocol):
    """Interface de relógio (epoch em segundos)"""

    def now(self) -> float:
        ...


class SystemClock:
    """Relógio real baseado em time.time()"""

    def now(self) -> float:
        return time.time()


class FakeClock:
    """Relógio virtual controlado manualmente (testes e simulações)"""

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def now(self) -> float:
        return self._now

    def set(self, value: float) -> None:
        self._now = float(value)

    def advance(self, seconds: float) -> float:
        self._now += seconds
        return self._now
