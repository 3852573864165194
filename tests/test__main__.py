#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

import pandas as pd

# -*- coding: utf-8 -*-
import pytest


def test_unknownFileExtention():
    from flowqc.__main__ import setupWriters, writeData

    writers = setupWriters("")
    with pytest.raises(ValueError):
        writeData(writers, pd.DataFrame(), "foo.unknown")


def test_siteInTwoDataFiles(tmp_path):
    from flowqc.__main__ import readData

    fnames = [tmp_path / "a.csv", tmp_path / "b.csv"]
    for fname in fnames:
        fname.write_text("timestamp,gauge\n2021-05-01,1.0\n")
    with pytest.raises(ValueError):
        readData(fnames)


def test_combineFrames():
    from flowqc.__main__ import combineFrames

    index = pd.DatetimeIndex(["2021-05-01", "2021-05-02"], name="timestamp")
    frames = {
        "a": pd.DataFrame({"value": [1.0, 2.0]}, index=index),
        "b": pd.DataFrame({"value": [3.0]}, index=index[:1]),
    }
    out = combineFrames(frames)
    assert list(out.columns) == ["site", "timestamp", "value"]
    assert out["site"].tolist() == ["a", "a", "b"]
    assert combineFrames({}).empty
