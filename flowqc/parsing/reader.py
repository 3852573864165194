#! /usr/bin/env python
# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
# SPDX-License-Identifier: GPL-3.0-or-later
# -*- coding: utf-8 -*-

from __future__ import annotations

import io
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Sequence, TextIO
from urllib.error import URLError
from urllib.request import urlopen

import pandas as pd
from pydantic import ValidationError

from flowqc.core.config import SiteConfig
from flowqc.core.records import FlowTarget
from flowqc.lib.exceptions import MalformedInputError, ParsingError

logger = logging.getLogger("FlowQC")

TARGET_COLUMNS = ["site", "min_flow", "max_flow", "spring_min_flow", "spring_max_flow"]
CONFIG_COLUMNS = ["site", "cadence", "span"]


def _open(file_or_buf) -> TextIO:
    if not isinstance(file_or_buf, (str, Path)):
        return file_or_buf
    try:
        fh = io.StringIO(urlopen(str(file_or_buf)).read().decode("utf-8"))
        fh.seek(0)
    except (ValueError, URLError):
        fh = io.open(file_or_buf, "r", encoding="utf-8")
    return fh


def _close(fh):
    try:
        fh.close()
    except AttributeError:
        pass


def _readCsv(fname, **kwargs) -> pd.DataFrame:
    # mimic `with open(): ...`
    file = _open(fname)
    try:
        return pd.read_csv(file, skipinitialspace=True, **kwargs)
    except pd.errors.EmptyDataError:
        raise ParsingError(f"file {fname!r} is empty") from None
    finally:
        _close(file)


# ----------------------------------------------------------------------
# series tables
# ----------------------------------------------------------------------


def _toNumeric(values: pd.Series, site, nodata) -> pd.Series:
    numeric = pd.to_numeric(values, errors="coerce").astype(float)
    invalid = numeric.isna() & values.notna()
    if invalid.any():
        logger.debug(f"site {site!r}: {invalid.sum()} unparsable values set to missing")
    if nodata is not None:
        numeric = numeric.mask(numeric == nodata)
    return numeric.rename(site)


def _toTimestamps(values: pd.Series) -> pd.DatetimeIndex:
    try:
        return pd.DatetimeIndex(pd.to_datetime(values), name="timestamp")
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"unparsable timestamps: {e}") from e


def readSeriesTable(
    fname,
    timestamp_col: str = "timestamp",
    site_col: str = "site",
    value_col: str = "value",
    nodata: Any = None,
) -> Dict[str, pd.Series]:
    """
    Read the raw series of one or more sites from a csv table.

    Two layouts are understood:

    * long tables, holding the columns ``site_col``, ``timestamp_col`` and
      ``value_col``, one row per reading,
    * wide tables, with timestamps in ``timestamp_col`` (or the first
      column) and one column of values per site.

    Empty cells of wide tables are dropped per site, so that sites of
    different cadence can share a sheet. Cells that are no number (or equal
    ``nodata``) become missing values.

    Returns
    -------
    dict
        Site name to raw ``pd.Series``, in file order.
    """
    logger.debug(f"opening series table: {fname}")
    df = _readCsv(fname, dtype=str, keep_default_na=True)
    df.columns = [str(c).strip() for c in df.columns]
    if df.columns.empty:
        raise ParsingError(f"series table {fname!r} holds no columns")

    out = {}
    if site_col in df.columns:
        missing = {timestamp_col, value_col} - set(df.columns)
        if missing:
            raise ParsingError(
                f"series table {fname!r} misses the columns {sorted(missing)}"
            )
        for site, group in df.groupby(site_col, sort=False):
            site = str(site).strip()
            s = _toNumeric(group[value_col], site, nodata)
            s.index = _toTimestamps(group[timestamp_col])
            out[site] = s
    else:
        ts_col = timestamp_col if timestamp_col in df.columns else df.columns[0]
        index = _toTimestamps(df[ts_col])
        for site in df.columns.drop(ts_col):
            raw = df[site].set_axis(index)
            s = _toNumeric(raw[raw.notna()], site, nodata)
            out[site] = s
    logger.debug(f"read {len(out)} sites: {list(out)}")
    return out


# ----------------------------------------------------------------------
# flow targets
# ----------------------------------------------------------------------


def readTargets(fname) -> Dict[str, FlowTarget]:
    """
    Read the flow targets table, a flat csv file with the columns
    ``site, min_flow, max_flow, spring_min_flow, spring_max_flow``.
    Empty cells denote absent bounds.
    """
    logger.debug(f"opening targets table: {fname}")
    df = _readCsv(fname, dtype=str)
    df.columns = [str(c).strip() for c in df.columns]
    missing = [c for c in TARGET_COLUMNS if c not in df.columns]
    if missing:
        raise ParsingError(f"targets table {fname!r} misses the columns {missing}")

    out = {}
    for lineno, row in zip(range(2, len(df) + 2), df[TARGET_COLUMNS].itertuples(index=False)):
        record = {
            k: (None if pd.isna(v) else v) for k, v in zip(TARGET_COLUMNS, row)
        }
        if record["site"] is None:
            raise ParsingError(f"targets table {fname!r}: missing site in line {lineno}")
        record["site"] = record["site"].strip()
        if record["site"] in out:
            raise ParsingError(
                f"targets table {fname!r}: duplicated site {record['site']!r} in line {lineno}"
            )
        try:
            out[record["site"]] = FlowTarget(**record)
        except ValidationError as e:
            raise ParsingError(
                f"targets table {fname!r}: invalid record in line {lineno}\n{e}"
            ) from None
    return out


# ----------------------------------------------------------------------
# site configuration
# ----------------------------------------------------------------------


def _readLines(
    it: Iterable[str], column_sep=";", comment_prefix="#"
) -> pd.DataFrame:
    out = []
    for i, line in enumerate(it):
        if not (row := line.strip().split(comment_prefix, 1)[0].strip()):
            continue
        parts = [p.strip() for p in row.split(column_sep)]
        if len(parts) not in (2, 3):
            raise ParsingError(
                f"The configuration format expects two or three "
                f"columns, the site name, its cadence and optionally "
                f"the detection span, but {len(parts)} columns were "
                f"found in line {i + 1}.\n\t{line!r}"
            )
        out.append([i + 1] + parts + [None] * (3 - len(parts)))
    if not out:
        raise ParsingError("Config file is empty")
    header = [p for p in out[0][1:] if p is not None]
    if header != CONFIG_COLUMNS[: len(header)] or len(header) < 2:
        raise ParsingError(
            f"The configuration header needs to be "
            f"'{' ; '.join(CONFIG_COLUMNS)}', got {header!r}"
        )
    return pd.DataFrame(out[1:], columns=["lineno"] + CONFIG_COLUMNS).set_index(
        "lineno"
    )


def _toConfigs(records: Sequence[Dict[str, Any]], where: List[str]) -> Dict[str, SiteConfig]:
    out = {}
    for loc, record in zip(where, records):
        record = {k: v for k, v in record.items() if not pd.isna(v)}
        try:
            config = SiteConfig(**record)
        except ValidationError as e:
            raise ParsingError(f"invalid site configuration in {loc}\n{e}") from None
        if config.site in out:
            raise ParsingError(f"duplicated site {config.site!r} in {loc}")
        out[config.site] = config
    return out


def readSiteConfig(fname) -> Dict[str, SiteConfig]:
    """
    Read a site configuration file.

    The file consists of ``;`` separated lines, lines and line ends
    starting with ``#`` are ignored. The first line is the header:

    .. code-block::

       site      ; cadence ; span
       # 15 minute gauges
       mainstem  ; 15min   ; 12h
       tributary ; 15min
       rain      ; 1D

    The span defaults to ``12h``.
    """
    logger.debug(f"opening config file: {fname}")
    file = _open(fname)
    try:
        df = _readLines(file)
    finally:
        _close(file)
    records = [
        {k: row[k] for k in CONFIG_COLUMNS} for _, row in df.iterrows()
    ]
    where = [f"{fname!r} line {lineno}" for lineno in df.index]
    return _toConfigs(records, where)


def readSiteConfigJson(fname, unpack=None) -> Dict[str, SiteConfig]:
    """
    Read a site configuration from a json file, holding an array of objects
    with the keys ``site``, ``cadence`` and optionally ``span``. Pass
    ``unpack`` to extract the array from a differently structured document.
    """
    logger.debug(f"opening json file: {fname}")
    file = _open(fname)
    try:
        d = json.load(file)
    finally:
        _close(file)
    if unpack is not None:
        d = unpack(d)
    elif isinstance(d, dict):
        raise TypeError("parsed json resulted in a dict, but a array/list is need")
    where = [f"{fname!r} element {i}" for i in range(len(d))]
    return _toConfigs(d, where)
