"""Zip-distance conversion scorer.

Scores a record by its planar distance to two anchor points, squashes the
score through a clamped logistic and draws a synthetic "T"/"F" conversion.
"""
import logging
from typing import Any, Iterable, List, Mapping, Optional, Protocol, Union

import numpy as np
import pandas as pd
from pydantic import ValidationError

from .schemas import InputRecord, OutputRecord

logger = logging.getLogger(__name__)

# (latitude, longitude)
WEST_ANCHOR = (34, -120)
EAST_ANCHOR = (28, -84)
DISTANCE_SCALE = 5

LOGISTIC_LOW = -5
LOGISTIC_HIGH = 5


class MissingFieldError(ValueError):
    """Raised when a record lacks a numeric zip latitude/longitude."""

    def __init__(self, field: str, reason: str = "field required"):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


class RandomSource(Protocol):
    def random(self) -> float: ...


def _parse(record: Union[Mapping[str, Any], InputRecord]) -> InputRecord:
    try:
        return InputRecord.model_validate(record)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(part) for part in err["loc"]) or "zip"
        raise MissingFieldError(field, err["msg"]) from e


def distance(point: Any, lat: float, lon: float):
    """Planar distance between ``point`` and ``(lat, lon)``.

    ``point`` needs ``latitude`` and ``longitude`` attributes; pandas frames
    work too and give a Series back.
    """
    dx = point.longitude - lon
    dy = point.latitude - lat
    d = np.hypot(dx, dy)
    return float(d) if np.ndim(d) == 0 else d


def logistic(x):
    """Logistic function pinned to exactly 0 below -5 and 1 above 5."""
    x = np.asarray(x, dtype=float)
    # keep exp() finite
    y = 1 / (1 + np.exp(-np.clip(x, LOGISTIC_LOW, LOGISTIC_HIGH)))
    y = np.where(x < LOGISTIC_LOW, 0.0, np.where(x > LOGISTIC_HIGH, 1.0, y))
    return float(y) if y.ndim == 0 else y


def _score(point: Any):
    x1 = distance(point, *WEST_ANCHOR)
    x2 = distance(point, *EAST_ANCHOR)
    z = np.minimum(x1 / DISTANCE_SCALE, x2 / DISTANCE_SCALE)
    z1 = 3 * (z - 2) - 2
    return logistic(z1)


def transform(record: Union[Mapping[str, Any], InputRecord],
              rng: Optional[RandomSource] = None) -> OutputRecord:
    """Score one record and draw its conversion.

    Consumes exactly one ``rng.random()`` draw. Without ``rng`` a fresh
    numpy generator is created for the call.
    """
    location = _parse(record).zip
    p = float(_score(location))

    if rng is None:
        rng = np.random.default_rng()
    conversion = "T" if rng.random() < p else "F"

    logger.debug("transform lat=%s lon=%s p=%.6f conversion=%s",
                 location.latitude, location.longitude, p, conversion)
    return OutputRecord(latitude=location.latitude, longitude=location.longitude,
                        p=p, conversion=conversion)


def transform_many(records: Iterable[Union[Mapping[str, Any], InputRecord]],
                   rng: Optional[RandomSource] = None) -> List[OutputRecord]:
    if rng is None:
        rng = np.random.default_rng()
    return [transform(r, rng) for r in records]


def score_frame(frame: pd.DataFrame,
                rng: Optional[np.random.Generator] = None) -> pd.DataFrame:
    """Vectorised ``transform`` over flat ``latitude``/``longitude`` columns."""
    for col in ("latitude", "longitude"):
        if col not in frame.columns:
            raise MissingFieldError(col)
        if not pd.api.types.is_numeric_dtype(frame[col]) or pd.api.types.is_bool_dtype(frame[col]):
            raise MissingFieldError(col, f"expected numeric column, got {frame[col].dtype}")
        if not np.isfinite(frame[col].to_numpy(dtype=float, na_value=np.nan)).all():
            raise MissingFieldError(col, "contains NaN or infinite values")

    if rng is None:
        rng = np.random.default_rng()

    out = frame[["latitude", "longitude"]].astype(float).reset_index(drop=True)
    out["p"] = np.asarray(_score(out), dtype=float)
    draws = rng.random(len(out))
    out["conversion"] = np.where(draws < out["p"].to_numpy(), "T", "F")
    logger.debug("score_frame rows=%d conversions=%d", len(out), int((out["conversion"] == "T").sum()))
    return out
