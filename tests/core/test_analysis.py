#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

import logging

import pandas as pd
import pytest

from flowqc.core.analysis import COLUMNS, analyzeSite, analyzeSites
from flowqc.core.config import ChangeThresholds, SiteConfig
from flowqc.core.records import FlowTarget
from tests.common import initSeries, rampValues


@pytest.fixture
def mainstem():
    return initSeries(
        [100.0, 100.0, 300.0, None, 40.0],
        start_date="2021-03-30",
        freq="1D",
        site="mainstem",
    )


@pytest.fixture
def target():
    return FlowTarget(site="mainstem", min_flow=50, max_flow=500, spring_min_flow=120)


def test_analyzeSite(mainstem, target):
    frame = analyzeSite(mainstem, span="12h", target=target)

    assert list(frame.columns) == COLUMNS
    assert frame.index.equals(mainstem.index)
    # no history for the first reading
    assert pd.isna(frame["change"].iloc[0])
    assert pd.isna(frame["trailing_missing_count"].iloc[0])
    assert frame["change"].iloc[1:].tolist() == [
        "normal",
        "severe",
        "undefined",
        "undefined",
    ]
    assert frame["trailing_missing_count"].iloc[1:].tolist() == [0, 0, 0, 1]
    assert frame["bounds"].tolist() == [
        "within_range",
        "within_range",
        "within_range",
        "undefined",
        "below_minimum",
    ]
    assert frame["min_flow"].tolist() == [50, 50, 120, 120, 120]
    assert frame["pct_change"].iloc[2] == pytest.approx(2.0)


def test_analyzeSiteWithoutTarget(mainstem):
    frame = analyzeSite(mainstem, span="12h")
    assert list(frame.columns) == COLUMNS
    assert frame[["min_flow", "max_flow", "bounds"]].isna().all(axis=None)
    assert frame["change"].iloc[2] == "severe"


def test_analyzeSiteThresholds(mainstem):
    thresholds = ChangeThresholds(elevated=2.5, severe=3.0)
    frame = analyzeSite(mainstem, span="1D", thresholds=thresholds)
    assert frame["change"].iloc[2] == "normal"


def test_analyzeSiteShortSeries(target):
    series = initSeries(rampValues(3), site="mainstem")
    frame = analyzeSite(series, span="12h", target=target)
    assert len(frame) == 3
    assert frame["change"].isna().all()
    assert frame["bounds"].tolist() == ["below_minimum"] * 3


def test_analyzeSites(mainstem, target, caplog):
    quarterly = initSeries(rampValues(10, missing=[2]), site="tributary")
    sites = {"mainstem": mainstem, "tributary": quarterly}
    configs = {
        "mainstem": SiteConfig(site="mainstem", cadence="1D"),
        "tributary": SiteConfig(site="tributary", cadence="15min", span="1h"),
        "ghost": SiteConfig(site="ghost", cadence="1h"),
    }
    with caplog.at_level(logging.WARNING, logger="FlowQC"):
        frames = analyzeSites(sites, configs, targets={"mainstem": target})

    assert list(frames) == ["mainstem", "tributary"]
    assert "'ghost' is configured, but has no data" in caplog.text
    assert "'tributary' has no flow target" in caplog.text

    tributary = frames["tributary"]
    # a span of 1h at 15min cadence looks back four readings
    assert tributary["change"].notna().sum() == 6
    assert tributary["trailing_missing_count"].iloc[4:7].tolist() == [1, 1, 1]
    assert tributary["bounds"].isna().all()
