#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-

from __future__ import annotations

import logging
from functools import partial
from pathlib import Path

import click
import pandas as pd
import pyarrow as pa
import pyarrow.parquet  # noqa: F401, makes pa.parquet available

from flowqc.constants import ELEVATED, SEVERE, SPRING_END, SPRING_START
from flowqc.core.analysis import analyzeSites
from flowqc.core.config import ChangeThresholds, Season
from flowqc.core.series import normalizeSites
from flowqc.parsing.reader import (
    readSeriesTable,
    readSiteConfig,
    readSiteConfigJson,
    readTargets,
)
from flowqc.version import __version__

logger = logging.getLogger("FlowQC")
LOG_FORMAT = "[%(asctime)s][%(name)s][%(levelname)s]: %(message)s"


def _setupLogging(loglvl):
    logger.setLevel(loglvl)
    logging.basicConfig(level=loglvl, format=LOG_FORMAT)


def setupWriters(nodata):
    return {
        ".csv": partial(pd.DataFrame.to_csv, header=True, index=False, na_rep=nodata),
        ".parquet": lambda df, outfile: pa.parquet.write_table(
            pa.Table.from_pandas(df), outfile
        ),
    }


def writeData(writer_dict, df, fname):
    extension = Path(fname).suffix
    writer = writer_dict.get(extension)
    if not writer:
        raise ValueError(
            f"Unsupported file format '{extension}', use one of {tuple(writer_dict.keys())}"
        )
    writer(df, fname)


def readData(fnames, nodata=None) -> dict[str, pd.Series]:
    out = {}
    for fname in fnames:
        for site, series in readSeriesTable(fname, nodata=nodata).items():
            if site in out:
                raise ValueError(f"site {site!r} found in more than one data file")
            out[site] = series
    return out


def combineFrames(frames: dict[str, pd.DataFrame]) -> pd.DataFrame:
    if not frames:
        return pd.DataFrame()
    return pd.concat(frames, names=["site"]).reset_index()


@click.command()
@click.version_option(__version__)
@click.option(
    "-c",
    "--config",
    type=click.Path(),
    required=True,
    help="Path to a site configuration file. Use a '.json' extension to provide a "
    "JSON-configuration. Otherwise files are treated as ';' separated text.",
)
@click.option(
    "-d",
    "--data",
    type=click.Path(),
    multiple=True,
    required=True,
    help="Path to a data file.",
)
@click.option(
    "-t",
    "--targets",
    type=click.Path(),
    required=False,
    help="Path to a flow targets table.",
)
@click.option(
    "-o",
    "--outfile",
    type=click.Path(exists=False),
    required=False,
    help="Path to a output file, either '.csv' or '.parquet'.",
)
@click.option(
    "--elevated",
    default=ELEVATED,
    show_default=True,
    type=float,
    help="Relative change, that counts as elevated.",
)
@click.option(
    "--severe",
    default=SEVERE,
    show_default=True,
    type=float,
    help="Relative change, that counts as severe.",
)
@click.option(
    "--spring-start",
    default=SPRING_START,
    show_default=True,
    help="First day ('MM-DD') of the spring flow targets.",
)
@click.option(
    "--spring-end",
    default=SPRING_END,
    show_default=True,
    help="Last day ('MM-DD') of the spring flow targets.",
)
@click.option(
    "--nodata",
    default=None,
    type=float,
    help="Value marking missing data in the data files.",
)
@click.option(
    "--log-level",
    "-ll",
    default="INFO",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING"]),
    help="Set log verbosity.",
)
def main(
    config: str,
    data: tuple[str, ...],
    targets: str | None,
    outfile: str | None,
    elevated: float,
    severe: float,
    spring_start: str,
    spring_end: str,
    nodata: float | None,
    log_level: str,
):
    _setupLogging(log_level)

    # validate options before touching any data
    writers = setupWriters(nodata="" if nodata is None else str(nodata))
    if outfile and Path(outfile).suffix not in writers:
        raise click.BadParameter(
            f"use one of {tuple(writers)}", param_hint="'--outfile'"
        )
    try:
        thresholds = ChangeThresholds(elevated=elevated, severe=severe)
        season = Season(start=spring_start, end=spring_end)
    except ValueError as e:
        raise click.BadParameter(str(e)) from None

    config = str(config)
    if config.endswith("json"):
        configs = readSiteConfigJson(config)
    else:
        configs = readSiteConfig(config)

    raw = readData(data, nodata=nodata)
    unconfigured = [site for site in raw if site not in configs]
    if unconfigured:
        logger.warning(f"ignoring sites without configuration: {unconfigured}")
    sites = normalizeSites(
        {site: raw[site] for site in raw if site in configs},
        {site: c.cadence for site, c in configs.items()},
    )

    flow_targets = readTargets(targets) if targets else None
    frames = analyzeSites(
        sites, configs, targets=flow_targets, thresholds=thresholds, season=season
    )

    if outfile:
        writeData(writers, combineFrames(frames), outfile)
        logger.info(f"written {len(frames)} sites to {outfile}")


if __name__ == "__main__":
    main()
