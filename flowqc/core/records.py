#! /usr/bin/env python
# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
# SPDX-License-Identifier: GPL-3.0-or-later
# -*- coding: utf-8 -*-

"""Immutable record types passed between the loader, the aggregator and the classifiers."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from flowqc.constants import BoundClass, ChangeClass


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True)


class Reading(_Record):
    """A single observation at one site, ``value`` is ``None`` if the measurement is missing."""

    timestamp: datetime
    value: Optional[float] = None

    @property
    def absent(self) -> bool:
        return self.value is None


class WindowedReading(Reading):
    """
    A reading together with aggregates over the readings immediately
    preceding it (the trailing window, excluding the reading itself).
    """

    trailing_average: Optional[float] = None
    trailing_missing_count: int = Field(..., ge=0)


class ChangeClassification(_Record):
    reading: WindowedReading
    pct_change: Optional[float] = None
    category: ChangeClass


class FlowBounds(_Record):
    """Acceptable flow range, a ``None`` bound is unlimited."""

    min_flow: Optional[float] = None
    max_flow: Optional[float] = None

    @model_validator(mode="after")
    def _checkOrder(self):
        _checkPair(self.min_flow, self.max_flow, "min_flow", "max_flow")
        return self


class FlowTarget(_Record):
    """
    Externally defined flow targets of a site.

    The ``spring_*`` bounds replace the year-round bounds within the
    spring season, if given.
    """

    site: str
    min_flow: Optional[float] = None
    max_flow: Optional[float] = None
    spring_min_flow: Optional[float] = None
    spring_max_flow: Optional[float] = None

    @model_validator(mode="after")
    def _checkOrder(self):
        _checkPair(self.min_flow, self.max_flow, "min_flow", "max_flow")
        _checkPair(
            self.spring_min_flow,
            self.spring_max_flow,
            "spring_min_flow",
            "spring_max_flow",
        )
        return self


class BoundClassification(_Record):
    reading: Reading
    bounds: FlowBounds
    category: BoundClass


def _checkPair(lower, upper, lname, uname):
    if lower is not None and upper is not None and lower > upper:
        raise ValueError(
            f"'{lname}' must not exceed '{uname}', got {lower} > {upper}"
        )
