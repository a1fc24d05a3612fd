from __future__ import annotations
from typing import Protocol

_MASK32 = 0xFFFFFFFF

# Affine stage -> state transform and additive counter step.
_SEED_MUL = 9301
_SEED_ADD = 49297
_STEP = 0x6D2B79F5


class RandomSource(Protocol):
    def random(self) -> float:  # returns in [0.0, 1.0)
        ...


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK32


class SeededRandom:
    """
    Deterministic 32-bit generator. Reseed once per stage; the same stage number
    always yields the same sequence.
    """

    def __init__(self, stage_number: int = 1) -> None:
        self._state = 0
        self.seed(stage_number)

    def seed(self, stage_number: int) -> None:
        self._state = (stage_number * _SEED_MUL + _SEED_ADD) & _MASK32

    def next(self) -> float:
        self._state = (self._state + _STEP) & _MASK32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & _MASK32
        t = (t ^ (t >> 14)) & _MASK32
        return t / 4294967296.0

    random = next

    @classmethod
    def for_stage(cls, stage_number: int) -> SeededRandom:
        return cls(stage_number)
