#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

from typing import Iterator

import pandas as pd

from flowqc.constants import DEFAULT_SPAN, ChangeClass
from flowqc.core.config import ChangeThresholds
from flowqc.core.records import ChangeClassification, WindowedReading
from flowqc.core.series import SiteSeries
from flowqc.lib.rolling import iterWindowed
from flowqc.lib.tools import timestampIndexed

DEFAULT_THRESHOLDS = ChangeThresholds()


def pctChange(value: float | None, reference: float | None) -> float | None:
    """
    Relative change of ``value`` against ``reference``.

    ``None`` if either is missing or ``reference`` is zero.
    """
    if value is None or reference is None or reference == 0:
        return None
    return (value - reference) / reference


def classifyChange(
    reading: WindowedReading, thresholds: ChangeThresholds = DEFAULT_THRESHOLDS
) -> ChangeClassification:
    """
    Classify the change of a reading against its trailing average.

    The change is ``undefined``, if the trailing average is missing or zero,
    or if the reading itself is missing. Otherwise it is ``severe`` if it
    reaches ``thresholds.severe``, ``elevated`` if it reaches
    ``thresholds.elevated`` and ``normal`` else.
    """
    pct = pctChange(reading.value, reading.trailing_average)
    if pct is None:
        category = ChangeClass.UNDEFINED
    elif pct >= thresholds.severe:
        category = ChangeClass.SEVERE
    elif pct >= thresholds.elevated:
        category = ChangeClass.ELEVATED
    else:
        category = ChangeClass.NORMAL
    return ChangeClassification(reading=reading, pct_change=pct, category=category)


def detectChanges(
    series: SiteSeries,
    span: str | pd.Timedelta = DEFAULT_SPAN,
    thresholds: ChangeThresholds | None = None,
) -> Iterator[ChangeClassification]:
    """
    Classify every reading of ``series`` against the average over the
    preceding ``span``. Readings without a full trailing window are skipped.
    """
    thresholds = thresholds or DEFAULT_THRESHOLDS
    for reading in iterWindowed(series, span):
        yield classifyChange(reading, thresholds)


def changesFrame(
    series: SiteSeries,
    span: str | pd.Timedelta = DEFAULT_SPAN,
    thresholds: ChangeThresholds | None = None,
) -> pd.DataFrame:
    """
    :py:func:`detectChanges` as a frame, indexed by timestamp and with the
    columns ``value``, ``trailing_average``, ``trailing_missing_count``,
    ``pct_change`` and ``change``.
    """
    records = [
        {
            "timestamp": c.reading.timestamp,
            "value": c.reading.value,
            "trailing_average": c.reading.trailing_average,
            "trailing_missing_count": c.reading.trailing_missing_count,
            "pct_change": c.pct_change,
            "change": c.category.value,
        }
        for c in detectChanges(series, span, thresholds)
    ]
    columns = [
        "timestamp",
        "value",
        "trailing_average",
        "trailing_missing_count",
        "pct_change",
        "change",
    ]
    out = pd.DataFrame.from_records(records, columns=columns)
    for col in ("value", "trailing_average", "pct_change"):
        out[col] = out[col].astype(float)
    return timestampIndexed(out, series.index)