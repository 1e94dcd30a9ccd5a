"""The four brightness operations: get, set, up and down.

Values are raw device units in raw mode and gamma-corrected percentages
otherwise. Results are clamped to ``[min_raw, max_raw]``; hitting an edge is
reported through :attr:`AdjustmentResult.saturated` rather than raised.

The kernel owns the current level and other programs may change it at any
time, so ``up`` and ``down`` re-read it immediately before computing the new
value. Do not cache it between operations.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field

from brightr.errors import InvalidInput
from brightr.mapping import check_exponent, percent_to_raw, raw_to_percent
from brightr.system.backlight import Backlight

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdjustConfig:
    exponent: float = 1.0
    min_raw: int = 0
    raw_mode: bool = False

    def __post_init__(self) -> None:
        check_exponent(self.exponent)
        if self.min_raw < 0:
            raise InvalidInput(f"minimum brightness must not be negative, got {self.min_raw}")


@dataclass(frozen=True)
class AdjustmentResult:
    previous_raw: int
    raw: int
    max_raw: int
    percent: float
    saturated: bool

    @property
    def changed(self) -> bool:
        return self.raw != self.previous_raw


def _check_amount(value: float, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(f"{what} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidInput(f"{what} must be finite, got {value}")
    return value


@dataclass
class Adjuster:
    device: Backlight
    cfg: AdjustConfig = field(default_factory=AdjustConfig)

    def __post_init__(self) -> None:
        if self.cfg.min_raw > self.device.max_raw:
            raise InvalidInput(
                f"minimum brightness {self.cfg.min_raw} is above the maximum "
                f"{self.device.max_raw} of {self.device.name}"
            )

    @property
    def max_raw(self) -> int:
        return self.device.max_raw

    def to_percent(self, raw: int) -> float:
        return raw_to_percent(raw, self.max_raw, self.cfg.min_raw, self.cfg.exponent)

    def from_percent(self, percent: float) -> int:
        return percent_to_raw(percent, self.max_raw, self.cfg.min_raw, self.cfg.exponent)

    def _clamp(self, raw: int) -> int:
        return min(max(raw, self.cfg.min_raw), self.max_raw)

    def get(self) -> tuple[int, int]:
        return self.device.read_raw(), self.max_raw

    def reading(self) -> tuple[int, int]:
        """Current level and maximum in the configured units, for "x/y" output."""

        current, max_raw = self.get()
        if self.cfg.raw_mode:
            return current, max_raw
        return math.floor(self.to_percent(current) + 0.5), 100

    def set(self, target: float) -> AdjustmentResult:
        target = _check_amount(target, "brightness value")
        previous = self.device.read_raw()
        if self.cfg.raw_mode:
            saturated = not self.cfg.min_raw <= target <= self.max_raw
            new_raw = self._clamp(round(target))
        else:
            saturated = not 0 <= target <= 100
            new_raw = self.from_percent(target)
        log.debug("set target = %s, in raw units = %d", target, new_raw)
        self.device.write_raw(new_raw)
        return self._result(previous, new_raw, saturated)

    def up(self, delta: float) -> AdjustmentResult:
        return self._step(delta, +1)

    def down(self, delta: float) -> AdjustmentResult:
        return self._step(delta, -1)

    def _step(self, delta: float, direction: int) -> AdjustmentResult:
        delta = _check_amount(delta, "adjustment")
        if delta < 0:
            raise InvalidInput(f"adjustment must not be negative, got {delta}")

        current = self.device.read_raw()
        edge = self.max_raw if direction > 0 else self.cfg.min_raw
        # Reported even for a zero delta: the device can't move this way.
        saturated = current >= edge if direction > 0 else current <= edge

        if self.cfg.raw_mode:
            new_raw = self._clamp(current + direction * round(delta))
        else:
            current_pct = self.to_percent(current)
            target = current_pct + direction * delta
            log.debug("current = %.2f%%, target = %.2f%%", current_pct, target)
            new_raw = self.from_percent(target)

        # Never move against the requested direction, e.g. from below min_raw.
        new_raw = max(new_raw, current) if direction > 0 else min(new_raw, current)
        new_raw = min(new_raw, self.max_raw)
        log.debug("target in raw units = %d", new_raw)

        if new_raw != current:
            self.device.write_raw(new_raw)
        return self._result(current, new_raw, saturated)

    def _result(self, previous: int, new_raw: int, saturated: bool) -> AdjustmentResult:
        return AdjustmentResult(
            previous_raw=previous,
            raw=new_raw,
            max_raw=self.max_raw,
            percent=self.to_percent(new_raw),
            saturated=saturated,
        )
