#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-

import io

import numpy as np
import pandas as pd

from flowqc.core.series import SiteSeries, normalize


def initSeries(
    values, start_date="2021-05-01", freq="15min", site="gauge"
) -> SiteSeries:
    """Build a normalized series from `values`, `None` marks missing readings."""
    dates = pd.date_range(start=start_date, freq=freq, periods=len(values))
    return normalize(list(zip(dates, values)), cadence=freq, site=site)


def rampValues(n, missing=()):
    vals = np.arange(1, n + 1, dtype=float)
    vals[list(missing)] = np.nan
    return [None if np.isnan(v) else v for v in vals]


def writeIO(content):
    f = io.StringIO()
    f.write(content)
    f.seek(0)
    return f
