#! /usr/bin/env python
# -*- coding: utf-8 -*-

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from flowqc.constants import DEFAULT_SPAN, ELEVATED, SEVERE, SPRING_END, SPRING_START
from flowqc.lib.checking import checkFreqStr, checkMonthDay
from flowqc.lib.tools import inSeason


class _Config(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


class ChangeThresholds(_Config):
    """
    Relative change thresholds, a change ``>= severe`` is severe, a change
    ``>= elevated`` is elevated.
    """

    elevated: float = ELEVATED
    severe: float = SEVERE

    @model_validator(mode="after")
    def _checkOrder(self):
        if self.severe < self.elevated:
            raise ValueError(
                f"'severe' ({self.severe}) must not be lower than 'elevated' ({self.elevated})"
            )
        return self


class Season(_Config):
    """Yearly recurring period, both ``"MM-DD"`` bounds included."""

    start: str = SPRING_START
    end: str = SPRING_END

    @field_validator("start", "end")
    @classmethod
    def _checkStamp(cls, value: str) -> str:
        return checkMonthDay(value)

    def contains(self, day: date) -> bool:
        return inSeason(day, self.start, self.end)


SPRING = Season()


class SiteConfig(_Config):
    site: str
    cadence: str
    span: str = DEFAULT_SPAN

    @field_validator("cadence", "span")
    @classmethod
    def _checkFreq(cls, value: str) -> str:
        checkFreqStr(value)
        return value
