#! /usr/bin/env python
# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
# SPDX-License-Identifier: GPL-3.0-or-later
# -*- coding: utf-8 -*-

# isort: skip_file

from flowqc.funcs.changes import (
    changesFrame,
    classifyChange,
    detectChanges,
    pctChange,
)
from flowqc.funcs.targets import (
    boundsFor,
    boundsFrame,
    checkTargets,
    classifyBounds,
    seasonalBounds,
)
