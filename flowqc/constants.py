#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

"""
The module comprises the classification labels and defaults in use throughout flowqc.

Change Classes
--------------
* :py:attr:`~flowqc.constants.ChangeClass.UNDEFINED`: no relative change could be computed,
  because the trailing average is absent or zero, or the value itself is absent
* :py:attr:`~flowqc.constants.ChangeClass.NORMAL`: the relative change stays below all thresholds
* :py:attr:`~flowqc.constants.ChangeClass.ELEVATED`: the relative change reached the elevated threshold
* :py:attr:`~flowqc.constants.ChangeClass.SEVERE`: the relative change reached the severe threshold

Bound Classes
-------------
* :py:attr:`~flowqc.constants.BoundClass.BELOW_MINIMUM`
* :py:attr:`~flowqc.constants.BoundClass.ABOVE_MAXIMUM`
* :py:attr:`~flowqc.constants.BoundClass.WITHIN_RANGE`
* :py:attr:`~flowqc.constants.BoundClass.UNDEFINED`: the value is absent

Defaults
--------
* :py:const:`~flowqc.constants.ELEVATED`, :py:const:`~flowqc.constants.SEVERE`: relative
  change thresholds, compared with ``>=``
* :py:const:`~flowqc.constants.DEFAULT_SPAN`: wall-clock extent of the trailing window
* :py:const:`~flowqc.constants.SPRING_START`, :py:const:`~flowqc.constants.SPRING_END`:
  inclusive bounds (``"MM-DD"``) of the spring season of the flow targets
"""

__all__ = [
    "ChangeClass",
    "BoundClass",
    "ELEVATED",
    "SEVERE",
    "DEFAULT_SPAN",
    "SPRING_START",
    "SPRING_END",
]

from enum import Enum


class ChangeClass(str, Enum):
    UNDEFINED = "undefined"
    NORMAL = "normal"
    ELEVATED = "elevated"
    SEVERE = "severe"


class BoundClass(str, Enum):
    BELOW_MINIMUM = "below_minimum"
    ABOVE_MAXIMUM = "above_maximum"
    WITHIN_RANGE = "within_range"
    UNDEFINED = "undefined"


# ----------------------------------------------------------------------
# change detection defaults
# ----------------------------------------------------------------------

ELEVATED = 1.0
SEVERE = 1.5
DEFAULT_SPAN = "12h"

# ----------------------------------------------------------------------
# flow target defaults
# ----------------------------------------------------------------------

SPRING_START = "04-01"
SPRING_END = "06-30"
