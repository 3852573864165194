#! /usr/bin/env python
# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
# SPDX-License-Identifier: GPL-3.0-or-later
# -*- coding: utf-8 -*-

# isort: skip_file

__all__ = [
    "Reading",
    "WindowedReading",
    "ChangeClassification",
    "BoundClassification",
    "FlowBounds",
    "FlowTarget",
    "ChangeThresholds",
    "Season",
    "SiteConfig",
    "SPRING",
    "SiteSeries",
    "normalize",
    "normalizeSites",
]

from flowqc.core.records import (
    Reading,
    WindowedReading,
    ChangeClassification,
    BoundClassification,
    FlowBounds,
    FlowTarget,
)
from flowqc.core.config import ChangeThresholds, Season, SiteConfig, SPRING
from flowqc.core.series import SiteSeries, normalize, normalizeSites
