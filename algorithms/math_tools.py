import math
from typing import Iterable

import numpy as np


class MathTools:
    """Provides essential mathematical utilities for workout calculations."""

    EPLEY_DIVISOR: int = 30
    BRZYCKI_LIMIT: int = 37
    LANDER_A: float = 101.3
    LANDER_B: float = 2.67123
    LOMBARDI_EXP: float = 0.10
    REP_TABLE_REPS: tuple[int, ...] = (1, 2, 3, 4, 5, 6, 8, 10, 12, 15, 20)

    @staticmethod
    def clamp(value: float, min_value: float, max_value: float) -> float:
        """Clamp ``value`` to the inclusive range [min_value, max_value]."""
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        return max(min_value, min(value, max_value))

    @staticmethod
    def round_half_up(value: float) -> int:
        """Round to the nearest integer with halves going up (2.5 -> 3, -2.5 -> -2)."""
        return int(math.floor(value + 0.5))

    @classmethod
    def round_tenth(cls, value: float) -> float:
        return cls.round_half_up(value * 10) / 10

    @classmethod
    def percent_change(cls, current: float, previous: float) -> int:
        """Return the signed percentage change from ``previous`` to ``current``.

        A zero baseline saturates: 100 when ``current`` grew from nothing,
        0 when both are zero.
        """
        if previous == 0:
            return 100 if current > 0 else 0
        return cls.round_half_up((current - previous) / previous * 100)

    @staticmethod
    def difference(current: float, previous: float) -> float:
        return current - previous

    @classmethod
    def epley_1rm(cls, weight: float, reps: int) -> float:
        """Return the estimated one-rep max using the Epley formula."""
        if reps == 1:
            return weight
        if weight <= 0 or reps <= 0:
            return 0
        return cls.round_half_up(weight * (1 + reps / cls.EPLEY_DIVISOR))

    @classmethod
    def brzycki_1rm(cls, weight: float, reps: int) -> float:
        if reps == 1:
            return weight
        if weight <= 0 or reps <= 0 or reps >= cls.BRZYCKI_LIMIT:
            return 0.0
        return weight * (36 / (cls.BRZYCKI_LIMIT - reps))

    @classmethod
    def lander_1rm(cls, weight: float, reps: int) -> float:
        if reps == 1:
            return weight
        if weight <= 0 or reps <= 0:
            return 0.0
        denominator = cls.LANDER_A - cls.LANDER_B * reps
        if denominator <= 0:
            return 0.0
        return weight * (100 / denominator)

    @classmethod
    def lombardi_1rm(cls, weight: float, reps: int) -> float:
        if reps == 1:
            return weight
        if weight <= 0 or reps <= 0:
            return 0.0
        return weight * reps**cls.LOMBARDI_EXP

    @classmethod
    def one_rep_max(cls, weight: float, reps: int) -> dict[str, float]:
        """Return 1RM estimates from all formulas plus their average."""
        if reps == 1:
            epley = weight
        elif weight <= 0 or reps <= 0:
            epley = 0.0
        else:
            # unrounded Epley so the average is not biased by integer rounding
            epley = weight * (1 + reps / cls.EPLEY_DIVISOR)
        estimates = {
            "epley": epley,
            "brzycki": cls.brzycki_1rm(weight, reps),
            "lander": cls.lander_1rm(weight, reps),
            "lombardi": cls.lombardi_1rm(weight, reps),
        }
        valid = [v for v in estimates.values() if v > 0]
        average = sum(valid) / len(valid) if valid else 0.0
        result = {k: cls.round_tenth(v) for k, v in estimates.items()}
        result["average"] = cls.round_tenth(average)
        return result

    @classmethod
    def weight_for_reps(cls, one_rm: float, reps: int) -> float:
        """Return the working weight for ``reps`` given a 1RM (Epley reversed)."""
        if reps == 1:
            return one_rm
        if reps <= 0 or one_rm <= 0:
            return 0
        return cls.round_half_up(one_rm / (1 + reps / cls.EPLEY_DIVISOR))

    @classmethod
    def rep_table(cls, one_rm: float) -> list[dict[str, float]]:
        """Return weight and percentage of 1RM for common rep targets."""
        rows = []
        for reps in cls.REP_TABLE_REPS:
            weight = cls.weight_for_reps(one_rm, reps)
            percentage = cls.round_half_up(weight / one_rm * 100) if one_rm > 0 else 0
            rows.append({"reps": reps, "weight": weight, "percentage": percentage})
        return rows

    @staticmethod
    def volume(sets: Iterable[tuple[int, float]]) -> float:
        """Compute training volume as the sum of reps times weight."""
        vol = 0.0
        for reps, weight in sets:
            vol += reps * weight
        return vol

    @staticmethod
    def coefficient_of_variation(values: Iterable[float]) -> float:
        """Return the coefficient of variation for ``values``."""
        data = list(values)
        if len(data) < 2:
            return 0.0
        arr = np.array(data, dtype=float)
        mean = float(np.mean(arr))
        if mean == 0:
            return 0.0
        std = float(np.std(arr))
        return std / mean
