#! /usr/bin/env python
# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
# SPDX-License-Identifier: GPL-3.0-or-later
# -*- coding: utf-8 -*-

# isort: skip_file

"""Cleaning, alignment and threshold checks of river flow and rainfall series."""

__all__ = [
    "ChangeClass",
    "BoundClass",
    "MalformedInputError",
    "ParsingError",
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
    "windowSize",
    "trailingWindow",
    "dayOverDay",
    "iterWindowed",
    "trailingFrame",
    "pctChange",
    "classifyChange",
    "detectChanges",
    "changesFrame",
    "seasonalBounds",
    "boundsFor",
    "classifyBounds",
    "checkTargets",
    "boundsFrame",
    "analyzeSite",
    "analyzeSites",
    "readSeriesTable",
    "readTargets",
    "readSiteConfig",
    "readSiteConfigJson",
]

from flowqc.constants import BoundClass, ChangeClass
from flowqc.lib.exceptions import MalformedInputError, ParsingError
from flowqc.core import (
    Reading,
    WindowedReading,
    ChangeClassification,
    BoundClassification,
    FlowBounds,
    FlowTarget,
    ChangeThresholds,
    Season,
    SiteConfig,
    SPRING,
    SiteSeries,
    normalize,
    normalizeSites,
)
from flowqc.lib.rolling import (
    windowSize,
    trailingWindow,
    dayOverDay,
    iterWindowed,
    trailingFrame,
)
from flowqc.funcs import (
    pctChange,
    classifyChange,
    detectChanges,
    changesFrame,
    seasonalBounds,
    boundsFor,
    classifyBounds,
    checkTargets,
    boundsFrame,
)
from flowqc.core.analysis import analyzeSite, analyzeSites
from flowqc.parsing.reader import (
    readSeriesTable,
    readTargets,
    readSiteConfig,
    readSiteConfigJson,
)
from flowqc.version import __version__
