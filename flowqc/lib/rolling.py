#!/usr/bin/env python
# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from typing import Iterator

import numpy as np
import pandas as pd
from numpy.lib.stride_tricks import sliding_window_view

from flowqc.constants import DEFAULT_SPAN
from flowqc.core.records import WindowedReading
from flowqc.core.series import SiteSeries
from flowqc.lib.checking import checkFreqStr, checkWindow
from flowqc.lib.tools import toOptional


def windowSize(cadence: str | pd.Timedelta, span: str | pd.Timedelta = DEFAULT_SPAN) -> int:
    """
    Number of prior readings covering ``span`` at the given ``cadence``.

    Windows are counted in readings, not in wall-clock time, so series of
    different cadences share the same detection span. A cadence at least as
    coarse as ``span`` (daily data and a 12 hour span) reduces to a window
    of a single reading.

    >>> windowSize("15min", "12h")
    48
    >>> windowSize("1D", "12h")
    1
    """
    cadence = checkFreqStr(cadence)
    span = checkFreqStr(span)
    if cadence >= span:
        return 1
    return int(span // cadence)


def trailingWindow(series: SiteSeries, window: int) -> Iterator[WindowedReading]:
    """
    Lazily aggregate the ``window`` readings preceding every reading.

    For the reading at position ``i >= window``, the trailing window spans the
    positions ``[i - window, i - 1]``, the reading itself is never part of it.
    Readings with less than ``window`` predecessors have no history and are
    skipped.

    Parameters
    ----------
    series :
        Normalized series.
    window :
        Number of prior readings to aggregate.

    Yields
    ------
    WindowedReading
        ``trailing_average`` is the mean of the present values in the window,
        ``None`` if all of them are missing. ``trailing_missing_count`` counts
        the missing values in the window.
    """
    window = checkWindow(window)
    vals = series.values
    if len(vals) <= window:
        return

    # windows over vals[:-1], so view k ends right before position k + window
    views = sliding_window_view(vals[:-1], window)
    for ts, value, win in zip(series.index[window:], vals[window:], views):
        missing = np.isnan(win)
        n_missing = int(missing.sum())
        average = None if n_missing == window else float(win[~missing].mean())
        yield WindowedReading(
            timestamp=ts,
            value=toOptional(value),
            trailing_average=average,
            trailing_missing_count=n_missing,
        )


def dayOverDay(series: SiteSeries) -> Iterator[WindowedReading]:
    """
    Compare every reading to its immediate predecessor.

    The degenerate trailing window of coarse series, where no sub-span
    history exists. Emits the same records as :py:func:`trailingWindow`.
    """
    previous = None
    for i, reading in enumerate(series.readings()):
        if i > 0:
            yield WindowedReading(
                timestamp=reading.timestamp,
                value=reading.value,
                trailing_average=previous,
                trailing_missing_count=int(previous is None),
            )
        previous = reading.value


def iterWindowed(
    series: SiteSeries, span: str | pd.Timedelta = DEFAULT_SPAN
) -> Iterator[WindowedReading]:
    """Trailing window readings of ``series`` over the wall-clock extent ``span``."""
    window = windowSize(series.cadence, span)
    if window == 1:
        return dayOverDay(series)
    return trailingWindow(series, window)


def trailingFrame(series: SiteSeries, window: int) -> pd.DataFrame:
    """
    Vectorized version of :py:func:`trailingWindow`.

    Returns
    -------
    pd.DataFrame
        Indexed by timestamp, with the columns ``value``, ``trailing_average``
        and ``trailing_missing_count``. The first ``window`` rows are dropped.
    """
    window = checkWindow(window)
    data = series.data
    prior = data.shift(1)
    roller = prior.rolling(window, min_periods=1)
    out = pd.DataFrame(
        {
            "value": data,
            "trailing_average": roller.mean(),
            "trailing_missing_count": prior.isna()
            .astype(int)
            .rolling(window, min_periods=window)
            .sum(),
        },
        index=data.index,
    )
    out = out.iloc[window:]
    out["trailing_missing_count"] = out["trailing_missing_count"].astype(int)
    return out
