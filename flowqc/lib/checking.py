#! /usr/bin/env python
# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
# SPDX-License-Identifier: GPL-3.0-or-later
# -*- coding: utf-8 -*-
from __future__ import annotations

import re

import pandas as pd

from flowqc.lib.exceptions import ParameterOutOfBounds

_MONTH_DAY = re.compile(r"^(\d{2})-(\d{2})$")


def checkFreqStr(freq: str | pd.Timedelta) -> pd.Timedelta:
    """
    Check that ``freq`` denotes a fixed, positive temporal extension and
    return it as a ``pd.Timedelta``.
    """
    if isinstance(freq, pd.Timedelta):
        f = freq
    else:
        try:
            offset = pd.tseries.frequencies.to_offset(freq)
        except ValueError:
            raise ValueError(f"Not an offset reference: '{freq}'")
        try:
            # newer pandas releases treat days as calendar offsets, not as ticks
            if isinstance(offset, pd.offsets.Day):
                f = pd.Timedelta(days=offset.n)
            else:
                f = pd.Timedelta(offset)
        except (TypeError, ValueError):
            raise ValueError(
                f"Not a frequency string: {freq}. \n "
                f"-> {freq} refers to an Offset (={offset}). But that cant be interpreted as Frequency (most likely because its not a fixed temporal extension)."
            )
    if f <= pd.Timedelta(0):
        raise ValueError(f"Frequency needs to be positive, got: {freq}")
    return f


def checkWindow(window: int) -> int:
    if isinstance(window, bool) or not isinstance(window, int) or window < 1:
        raise ParameterOutOfBounds(window, "window", ("1", "inf"), closed="left")
    return window


def checkMonthDay(stamp: str) -> str:
    """Check a ``"MM-DD"`` string for a valid (leap year) calendar day."""
    match = _MONTH_DAY.match(stamp)
    if match is None:
        raise ValueError(f"Not a 'MM-DD' date: '{stamp}'")
    month, day = map(int, match.groups())
    try:
        pd.Timestamp(year=2000, month=month, day=day)
    except ValueError:
        raise ValueError(f"Not a calendar day: '{stamp}'")
    return stamp
