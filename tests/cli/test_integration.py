#!/usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later
from pathlib import Path

import pandas as pd
import pytest
from click.testing import CliRunner

from flowqc.__main__ import main

CONFIG = """
site     ; cadence ; span
mainstem ; 15min   ; 1h
rain     ; 1D
"""

DATA = [
    "site,timestamp,value\n",
    "mainstem,2021-05-01 00:00,10\n",
    "mainstem,2021-05-01 00:15,10\n",
    "mainstem,2021-05-01 00:30,10\n",
    "mainstem,2021-05-01 00:45,10\n",
    "mainstem,2021-05-01 01:00,30\n",
    "mainstem,2021-05-01 01:30,12\n",
    "rain,2021-05-01,0.0\n",
    "rain,2021-05-02,2.0\n",
    "rain,2021-05-03,4.0\n",
    "unknown,2021-05-03,4.0\n",
]

TARGETS = [
    "site,min_flow,max_flow,spring_min_flow,spring_max_flow\n",
    "mainstem,5,20,11,\n",
]


@pytest.fixture
def files(tmp_path):
    config = Path(tmp_path, "config.csv")
    config.write_text(CONFIG)
    data = Path(tmp_path, "data.csv")
    data.write_text("".join(DATA))
    targets = Path(tmp_path, "targets.csv")
    targets.write_text("".join(TARGETS))
    return config, data, targets


def _invoke(files, outfile, *extra):
    config, data, targets = files
    args = [
        "--config",
        str(config),
        "--data",
        str(data),
        "--targets",
        str(targets),
        "--outfile",
        str(outfile),
        *extra,
    ]
    return CliRunner().invoke(main, args)


@pytest.mark.slow
def test__main__csv(tmp_path, files):
    outfile = Path(tmp_path, "out.csv")
    result = _invoke(files, outfile)
    assert result.exit_code == 0, result.output

    df = pd.read_csv(outfile)
    assert list(df.columns) == [
        "site",
        "timestamp",
        "value",
        "trailing_average",
        "trailing_missing_count",
        "pct_change",
        "change",
        "min_flow",
        "max_flow",
        "bounds",
    ]
    assert df["site"].tolist() == ["mainstem"] * 7 + ["rain"] * 3

    mainstem = df[df["site"] == "mainstem"]
    assert mainstem["change"].iloc[4:].tolist() == ["severe", "undefined", "normal"]
    assert mainstem["trailing_missing_count"].iloc[4:].tolist() == [0, 0, 1]
    assert mainstem["bounds"].tolist() == ["below_minimum"] * 4 + [
        "above_maximum",
        "undefined",
        "within_range",
    ]

    rain = df[df["site"] == "rain"]
    assert rain["change"].iloc[1:].tolist() == ["undefined", "elevated"]
    assert rain["bounds"].isna().all()


@pytest.mark.slow
def test__main__parquet(tmp_path, files):
    outfile = Path(tmp_path, "out.parquet")
    result = _invoke(files, outfile)
    assert result.exit_code == 0, result.output

    df = pd.read_parquet(outfile)
    assert len(df) == 10
    assert df["change"].iloc[4] == "severe"


def test__main__nodata(tmp_path, files):
    outfile = Path(tmp_path, "out.csv")
    result = _invoke(files, outfile, "--nodata", "-9999")
    assert result.exit_code == 0, result.output
    with open(outfile, "r") as f:
        assert "-9999.0" in f.readlines()[1]


@pytest.mark.parametrize(
    "extra",
    [
        ["--elevated", "2.0", "--severe", "1.0"],
        ["--spring-start", "April"],
        ["--elevated", "nan"],
        ["--severe", "inf"],
    ],
)
def test__main__invalidOptions(tmp_path, files, extra):
    outfile = Path(tmp_path, "out.csv")
    result = _invoke(files, outfile, *extra)
    assert result.exit_code == 2
    assert not outfile.exists()


def test__main__invalidOutfile(tmp_path, files):
    result = _invoke(files, Path(tmp_path, "out.xlsx"))
    assert result.exit_code == 2


def test__main__version():
    result = CliRunner().invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "0.1.0" in result.output


def test__main__missingConfig(tmp_path, files):
    _, data, targets = files
    outfile = Path(tmp_path, "out.csv")
    result = _invoke((Path(tmp_path, "missing.cfg"), data, targets), outfile)
    assert isinstance(result.exception, FileNotFoundError)
    assert not outfile.exists()
