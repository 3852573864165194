#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Mapping

import pandas as pd

from flowqc.constants import DEFAULT_SPAN, BoundClass, ChangeClass
from flowqc.core.config import SPRING, ChangeThresholds, Season, SiteConfig
from flowqc.core.records import FlowTarget
from flowqc.core.series import SiteSeries
from flowqc.funcs.changes import changesFrame
from flowqc.funcs.targets import boundsFrame

logger = logging.getLogger("FlowQC")

COLUMNS = [
    "value",
    "trailing_average",
    "trailing_missing_count",
    "pct_change",
    "change",
    "min_flow",
    "max_flow",
    "bounds",
]


def analyzeSite(
    series: SiteSeries,
    span: str | pd.Timedelta = DEFAULT_SPAN,
    thresholds: ChangeThresholds | None = None,
    target: FlowTarget | None = None,
    season: Season = SPRING,
) -> pd.DataFrame:
    """
    Combine change detection and flow target check of one site.

    The result holds a row for every slot of ``series``. Rows without a
    full trailing window have no change columns, and all bound columns
    stay empty, if no ``target`` is given.
    """
    out = series.data.rename("value").to_frame()
    changes = changesFrame(series, span, thresholds).drop(columns="value")
    out = out.join(changes)
    if target is not None:
        bounds = boundsFrame(series, target, season).drop(columns="value")
        out = out.join(bounds)
    out = out.reindex(columns=COLUMNS)
    out["trailing_missing_count"] = out["trailing_missing_count"].astype("Int64")
    return out


def _logSummary(site: str, frame: pd.DataFrame):
    changes = frame["change"].value_counts()
    bounds = frame["bounds"].value_counts()
    logger.info(
        f"site {site!r}: {len(frame)} slots, "
        f"{frame['value'].isna().sum()} missing, "
        f"{changes.get(ChangeClass.SEVERE.value, 0)} severe, "
        f"{changes.get(ChangeClass.ELEVATED.value, 0)} elevated, "
        f"{bounds.get(BoundClass.BELOW_MINIMUM.value, 0)} below minimum, "
        f"{bounds.get(BoundClass.ABOVE_MAXIMUM.value, 0)} above maximum"
    )


def analyzeSites(
    sites: Mapping[str, SiteSeries],
    configs: Mapping[str, SiteConfig],
    targets: Mapping[str, FlowTarget] | None = None,
    thresholds: ChangeThresholds | None = None,
    season: Season = SPRING,
) -> dict[str, pd.DataFrame]:
    """
    Run :py:func:`analyzeSite` for every configured site.

    Sites missing in ``sites`` are skipped with a warning. The change
    detection span of each site is taken from its configuration.
    """
    targets = targets or {}
    out = {}
    for site, config in configs.items():
        if site not in sites:
            logger.warning(f"site {site!r} is configured, but has no data")
            continue
        target = targets.get(site)
        if target is None:
            logger.warning(f"site {site!r} has no flow target, skipping bound check")
        frame = analyzeSite(
            sites[site],
            span=config.span,
            thresholds=thresholds,
            target=target,
            season=season,
        )
        _logSummary(site, frame)
        out[site] = frame
    return out
