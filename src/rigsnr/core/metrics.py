"""Signal metric helpers for extremes-based SNR/DNR readouts."""

from __future__ import annotations

import math
from dataclasses import dataclass

# Hamlib reports S9 as 0; +55 maps S0 to 1 so neither metric can blow up.
DEFAULT_OFFSET = 55
DEFAULT_CEILING = 200.0
NORMALIZED_FLOOR = 1.0


@dataclass(frozen=True, slots=True)
class DerivedMetrics:
    snr: float = 0.0
    dnr: float = 0.0


def normalize(raw: int, offset: int = DEFAULT_OFFSET) -> float:
    """Shift a raw strength reading onto a scale floored at 1."""
    return max(float(raw + offset), NORMALIZED_FLOOR)


def compute_metrics(high: float, low: float) -> DerivedMetrics:
    """Derive SNR and DNR from the running extremes.

    SNR uses the natural logarithm even though the readout calls it dB.
    The numbers stay comparable with earlier readings taken with the
    same formula.
    """
    denominator = max(low, NORMALIZED_FLOOR)
    return DerivedMetrics(
        snr=10.0 * math.log(abs(high / denominator)),
        dnr=high - low,
    )


def format_metrics(metrics: DerivedMetrics, *, width: int = 8, precision: int = 2) -> str:
    """Format metrics as a fixed-width ``SNR: ... DNR: ...`` line."""
    return f"SNR: {metrics.snr:{width}.{precision}f} DNR: {metrics.dnr:{width}.{precision}f}"
