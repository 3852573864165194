#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

import datetime
from typing import Any

import numpy as np
import pandas as pd

from flowqc.lib.checking import checkFreqStr


def toOptional(value: Any) -> float | None:
    """Map a numeric value to ``float`` and ``NaN``/``None`` to ``None``."""
    if value is None or pd.isna(value):
        return None
    return float(value)


def getFreqDelta(index: pd.Index) -> None | pd.Timedelta:
    """
    Function checks if the passed index is regularly sampled.

    If yes, the according timedelta value is returned,

    If no, ``None`` is returned.

    (``None`` will also be returned for pd.RangeIndex type.)

    """
    delta = getattr(index, "freq", None)
    if delta is None and len(index) > 1:
        i = pd.date_range(index[0], index[-1], len(index))
        if i.equals(index):
            return i[1] - i[0]
    if delta is not None:
        try:
            return checkFreqStr(delta)
        except ValueError:
            # calendar frequencies, like month starts
            return None
    return delta


def offGrid(index: pd.DatetimeIndex, freq: pd.Timedelta) -> np.ndarray:
    """
    Return a boolean mask of the timestamps in ``index``, that do not lie on
    the grid of period ``freq`` anchored at ``index[0]``.
    """
    if index.empty:
        return np.zeros(0, dtype=bool)
    return ((index - index[0]) % freq) != pd.Timedelta(0)


def monthDay(stamp: str) -> tuple[int, int]:
    month, day = stamp.split("-")
    return int(month), int(day)


def inSeason(date: datetime.date, season_start: str, season_end: str) -> bool:
    """
    Check if ``date`` falls into the yearly recurring period spanned by
    ``season_start`` and ``season_end``.

    Both bounds are ``"MM-DD"`` strings and included in the period. To select a
    period lapping over the turn of the year, like winter, pass a ``season_start``
    later in the year than ``season_end``.

    Examples
    --------
    >>> inSeason(datetime.date(2021, 5, 3), "04-01", "06-30")
    True
    >>> inSeason(datetime.date(2021, 1, 3), "12-01", "02-28")
    True
    """
    key = (date.month, date.day)
    start, end = monthDay(season_start), monthDay(season_end)
    if start <= end:
        return start <= key <= end
    return key >= start or key <= end


def timestampIndexed(frame: pd.DataFrame, like: pd.DatetimeIndex) -> pd.DataFrame:
    """
    Move the ``timestamp`` column of ``frame`` to its index. An empty frame
    gets an empty slice of ``like``, to keep index dtype and timezone.
    """
    if frame.empty:
        return frame.drop(columns="timestamp").set_axis(like[:0])
    index = pd.DatetimeIndex(frame.pop("timestamp"), name="timestamp")
    return frame.set_axis(index)
