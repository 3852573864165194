#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

import datetime

import numpy as np
import pandas as pd
from hypothesis.strategies import (
    composite,
    datetimes,
    floats,
    integers,
    lists,
    none,
    one_of,
    sampled_from,
)

from flowqc.core.series import normalize

MAX_EXAMPLES = 50
# MAX_EXAMPLES = 100000

CADENCES = ["15min", "1h", "6h", "1D"]


@composite
def cadences(draw):
    return draw(sampled_from(CADENCES))


@composite
def flowValues(draw, size):
    # None marks a missing reading
    elements = one_of(none(), floats(min_value=0, max_value=1e6, allow_nan=False))
    return draw(lists(elements, min_size=size, max_size=size))


@composite
def rawSeries(draw, min_size=1, max_size=100):
    """
    A raw series on the grid of a drawn cadence with some of its slots
    dropped. Returns the series and the cadence.
    """
    cadence = draw(cadences())
    start = draw(
        datetimes(
            min_value=datetime.datetime(2000, 1, 1),
            max_value=datetime.datetime(2030, 12, 31),
        )
    )
    periods = draw(integers(min_value=min_size, max_value=max_size))
    index = pd.date_range(start, periods=periods, freq=cadence)
    values = draw(flowValues(periods))

    # keep the first slot, so the grid stays anchored
    keep = [0] + draw(
        lists(integers(min_value=1, max_value=periods - 1), unique=True)
        if periods > 1
        else lists(integers(), max_size=0)
    )
    keep = sorted(keep)
    raw = pd.Series(
        [np.nan if values[i] is None else values[i] for i in keep],
        index=index[keep],
        dtype=float,
    )
    return raw, cadence


@composite
def siteSeries(draw, min_size=1, max_size=100):
    raw, cadence = draw(rawSeries(min_size=min_size, max_size=max_size))
    return normalize(raw, cadence=cadence, site="gauge")


@composite
def windows(draw, max_size=12):
    return draw(integers(min_value=1, max_value=max_size))
