#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

from datetime import date
from typing import Iterator, Mapping

import pandas as pd

from flowqc.constants import BoundClass
from flowqc.core.config import SPRING, Season
from flowqc.core.records import BoundClassification, FlowBounds, FlowTarget
from flowqc.core.series import SiteSeries
from flowqc.lib.tools import timestampIndexed


def seasonalBounds(
    target: FlowTarget, day: date, season: Season = SPRING
) -> FlowBounds:
    """
    Flow bounds of ``target`` in effect at ``day``.

    Within ``season``, the spring bounds replace the year-round bounds,
    every side on its own and only if given.
    """
    lower, upper = target.min_flow, target.max_flow
    if season.contains(day):
        if target.spring_min_flow is not None:
            lower = target.spring_min_flow
        if target.spring_max_flow is not None:
            upper = target.spring_max_flow
    return FlowBounds(min_flow=lower, max_flow=upper)


def boundsFor(
    targets: Mapping[str, FlowTarget],
    site: str,
    day: date,
    season: Season = SPRING,
) -> FlowBounds:
    """
    Look up the flow bounds of ``site`` at ``day``.

    Raises
    ------
    KeyError
        If ``targets`` holds no entry for ``site``.
    """
    try:
        target = targets[site]
    except KeyError:
        raise KeyError(f"no flow target for site {site!r}") from None
    return seasonalBounds(target, day, season)


def classifyBounds(value: float | None, bounds: FlowBounds) -> BoundClass:
    """
    Classify ``value`` against ``bounds``, the bounds themselves are
    within range.

    >>> classifyBounds(30, FlowBounds(min_flow=50, max_flow=500))
    <BoundClass.BELOW_MINIMUM: 'below_minimum'>
    """
    if value is None:
        return BoundClass.UNDEFINED
    if bounds.min_flow is not None and value < bounds.min_flow:
        return BoundClass.BELOW_MINIMUM
    if bounds.max_flow is not None and value > bounds.max_flow:
        return BoundClass.ABOVE_MAXIMUM
    return BoundClass.WITHIN_RANGE


def checkTargets(
    series: SiteSeries, target: FlowTarget, season: Season = SPRING
) -> Iterator[BoundClassification]:
    """Classify every reading of ``series`` against the bounds of ``target``."""
    for reading in series.readings():
        bounds = seasonalBounds(target, reading.timestamp.date(), season)
        yield BoundClassification(
            reading=reading,
            bounds=bounds,
            category=classifyBounds(reading.value, bounds),
        )


def boundsFrame(
    series: SiteSeries, target: FlowTarget, season: Season = SPRING
) -> pd.DataFrame:
    """
    :py:func:`checkTargets` as a frame, indexed by timestamp and with the
    columns ``value``, ``min_flow``, ``max_flow`` and ``bounds``.
    """
    records = [
        {
            "timestamp": c.reading.timestamp,
            "value": c.reading.value,
            "min_flow": c.bounds.min_flow,
            "max_flow": c.bounds.max_flow,
            "bounds": c.category.value,
        }
        for c in checkTargets(series, target, season)
    ]
    out = pd.DataFrame.from_records(
        records, columns=["timestamp", "value", "min_flow", "max_flow", "bounds"]
    )
    for col in ("value", "min_flow", "max_flow"):
        out[col] = out[col].astype(float)
    return timestampIndexed(out, series.index)
