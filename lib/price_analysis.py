# =============================================================================
# lib/price_analysis.py - Price Risk Analysis
# =============================================================================
# Turns a short price series into an investment recommendation:
# 1. Moving average over a trailing window of daily closes
# 2. Risk tier from the relative distance between the latest price and that average
# 3. Suggested allocation from a fixed risk -> amount table
#
# Everything here is pure and deterministic: the same series and parameters
# always give the same RiskAnalysis. No I/O happens in this module.
#
# Usage:
#   from lib.price_analysis import analyze_price_series, daily_closes
#   closes = daily_closes(points)          # [(ms, price), ...] -> [price, ...]
#   analysis = analyze_price_series(closes, window=7)
# =============================================================================

from __future__ import annotations

import logging
import math
from typing import Iterable, Sequence

import pandas as pd

from core.models.analysis import RiskAnalysis, RiskLevel
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)


# Suggested investment (fiat units) per risk tier
SUGGESTED_INVESTMENT: dict[RiskLevel, float] = {
    RiskLevel.LOW: 100.0,
    RiskLevel.MEDIUM: 50.0,
    RiskLevel.HIGH: 25.0,
}

DEFAULT_WINDOW = 7
DEFAULT_LOW_THRESHOLD = 0.02
DEFAULT_HIGH_THRESHOLD = 0.05


class PriceAnalysisError(ApplicationError):
    """Raised when a price series cannot be analyzed."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="PRICE_ANALYSIS_ERROR", **kwargs)


# =============================================================================
# Series Preparation
# =============================================================================

def daily_closes(points: Iterable[Sequence[float]]) -> list[float]:
    """
    Collapse timestamped prices into one closing price per UTC day.

    CoinGecko returns 5-minute, hourly or daily points depending on the
    requested range; resampling makes the window length mean "days"
    regardless of granularity.

    Args:
        points: Iterable of (timestamp_ms, price) pairs

    Returns:
        Daily closing prices, oldest first
    """
    df = pd.DataFrame(list(points), columns=["timestamp", "price"])
    if df.empty:
        return []

    df["timestamp"] = pd.to_datetime(df["timestamp"], unit="ms", utc=True)
    closes = (
        df.sort_values("timestamp")
        .set_index("timestamp")["price"]
        .resample("1D")
        .last()
        .dropna()
    )
    return [float(p) for p in closes]


# =============================================================================
# Analysis
# =============================================================================

def moving_average(prices: Sequence[float], window: int = DEFAULT_WINDOW) -> float:
    """
    Arithmetic mean of the trailing `window` prices.

    Uses every price when the series is shorter than the window.
    """
    if window < 1:
        raise PriceAnalysisError(
            f"Window must be at least 1, got {window}",
            suggestion="Set MOVING_AVERAGE_WINDOW to a positive integer",
        )
    series = pd.Series(prices, dtype="float64")
    return float(series.rolling(window=window, min_periods=1).mean().iloc[-1])


def classify_risk(
    deviation: float,
    low_threshold: float = DEFAULT_LOW_THRESHOLD,
    high_threshold: float = DEFAULT_HIGH_THRESHOLD,
) -> RiskLevel:
    """
    Map the relative distance from the moving average to a risk tier.

    Boundaries belong to the lower tier.
    """
    distance = abs(deviation)
    if distance <= low_threshold:
        return RiskLevel.LOW
    if distance <= high_threshold:
        return RiskLevel.MEDIUM
    return RiskLevel.HIGH


def build_recommendation(risk_level: RiskLevel, deviation: float) -> str:
    """Human readable advice for a risk tier."""
    pct = abs(deviation) * 100
    if deviation > 0:
        position = f"{pct:.2f}% above"
    elif deviation < 0:
        position = f"{pct:.2f}% below"
    else:
        position = "at"

    amount = SUGGESTED_INVESTMENT[risk_level]
    if risk_level == RiskLevel.LOW:
        return (
            f"Price is trading {position} its moving average. "
            f"Market looks stable, a larger position of ${amount:g} is reasonable."
        )
    if risk_level == RiskLevel.MEDIUM:
        return (
            f"Price is trading {position} its moving average. "
            f"Moderate movement, consider a balanced position of ${amount:g}."
        )
    return (
        f"Price is trading {position} its moving average. "
        f"Market is volatile, keep the position small at ${amount:g}."
    )


def analyze_price_series(
    prices: Sequence[float],
    window: int = DEFAULT_WINDOW,
    low_threshold: float = DEFAULT_LOW_THRESHOLD,
    high_threshold: float = DEFAULT_HIGH_THRESHOLD,
) -> RiskAnalysis:
    """
    Analyze a price series and produce a risk-tiered recommendation.

    Args:
        prices: Prices oldest first; the last one is the current price
        window: Trailing window for the moving average
        low_threshold: Max |deviation| rated low risk
        high_threshold: Max |deviation| rated medium risk

    Returns:
        RiskAnalysis with risk level, recommendation, suggested investment,
        moving average and current price

    Raises:
        PriceAnalysisError: If the series is empty or contains
            non-positive or non-finite prices

    Example:
        >>> analyze_price_series([1.0, 1.0, 1.0]).risk_level
        <RiskLevel.LOW: 'low'>
    """
    if not prices:
        raise PriceAnalysisError(
            "Cannot analyze an empty price series",
            suggestion="Check that the price provider returned history for the token",
        )

    bad = [p for p in prices if not math.isfinite(p) or p <= 0]
    if bad:
        raise PriceAnalysisError(
            f"Price series contains {len(bad)} invalid value(s)",
            suggestion="Prices must be positive finite numbers",
            details={"invalid": bad[:5]},
        )

    average = moving_average(prices, window)
    current = float(prices[-1])
    deviation = (current - average) / average

    risk_level = classify_risk(deviation, low_threshold, high_threshold)
    logger.debug(
        f"Analyzed {len(prices)} prices: current={current:.6f} "
        f"ma={average:.6f} deviation={deviation:.4%} risk={risk_level.value}"
    )

    return RiskAnalysis(
        risk_level=risk_level,
        recommendation=build_recommendation(risk_level, deviation),
        suggested_investment=SUGGESTED_INVESTMENT[risk_level],
        moving_average=average,
        current_price=current,
    )
