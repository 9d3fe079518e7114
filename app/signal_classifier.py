# signal_classifier.py
# Frozen signal bands v1.0.0
# Acceleration in, one of five signals out. Total function, never raises.

import math
from typing import Optional

from momentum_schema import Signal, SignalKind

STRONG_THRESHOLD = 5.0   # inclusive on the STRONG_BUY side
TRIM_THRESHOLD = -5.0    # inclusive on the TRIM side

SIGNAL_LABELS = {
    SignalKind.WAITING: "Insufficient Data",
    SignalKind.STRONG_BUY: "Strong Acceleration",
    SignalKind.BUY: "Accelerating",
    SignalKind.CAUTION: "Decelerating",
    SignalKind.TRIM: "Strong Deceleration",
}


def signal_for(kind: SignalKind) -> Signal:
    return Signal(kind=kind, label=SIGNAL_LABELS[kind])


def classify(acceleration: Optional[float]) -> Signal:
    """
    Map one acceleration value to a signal band.

    Checked top to bottom, first match wins:
    - None / NaN      -> WAITING
    - a >= 5          -> STRONG_BUY
    - 0 < a < 5       -> BUY
    - a <= -5         -> TRIM
    - -5 < a <= 0     -> CAUTION  (exactly 0 is not a buy)

    Args:
        acceleration: 2nd order ROC in percentage points, or None

    Returns:
        Signal with fixed label for the band
    """
    if acceleration is None or math.isnan(acceleration):
        return signal_for(SignalKind.WAITING)

    if acceleration >= STRONG_THRESHOLD:
        return signal_for(SignalKind.STRONG_BUY)

    elif acceleration > 0:
        return signal_for(SignalKind.BUY)

    elif acceleration <= TRIM_THRESHOLD:
        return signal_for(SignalKind.TRIM)

    else:
        return signal_for(SignalKind.CAUTION)
