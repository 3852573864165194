#! /usr/bin/env python

# SPDX-FileCopyrightText: 2021 Helmholtz-Zentrum für Umweltforschung GmbH - UFZ
#
# SPDX-License-Identifier: GPL-3.0-or-later

# -*- coding: utf-8 -*-
from __future__ import annotations

import logging
from typing import Iterable, Iterator, Mapping, Optional, Tuple, Union

import numpy as np
import pandas as pd

from flowqc.core.records import Reading
from flowqc.lib.checking import checkFreqStr
from flowqc.lib.exceptions import MalformedInputError
from flowqc.lib.tools import getFreqDelta, offGrid, toOptional

logger = logging.getLogger("FlowQC")

RawSeries = Union[
    "SiteSeries", pd.Series, Iterable[Tuple[object, Optional[float]]]
]


class SiteSeries:
    """
    A read-only series of readings of one site, sampled at a fixed cadence.

    Every slot between the first and the last timestamp is present,
    missing measurements are ``NaN`` in :py:attr:`data` and ``None`` on the
    :py:class:`~flowqc.core.records.Reading` records. Instances are created by
    :py:func:`normalize`.
    """

    __slots__ = ("_data", "_cadence", "_site")

    def __init__(
        self, data: pd.Series, cadence: pd.Timedelta, site: str | None = None
    ):
        self._data = data.astype(float).rename(site).rename_axis("timestamp")
        self._cadence = cadence
        self._site = site

    @property
    def site(self) -> str | None:
        return self._site

    @property
    def cadence(self) -> pd.Timedelta:
        return self._cadence

    @property
    def data(self) -> pd.Series:
        return self._data.copy()

    @property
    def index(self) -> pd.DatetimeIndex:
        return self._data.index

    @property
    def values(self) -> np.ndarray:
        return self._data.to_numpy(copy=True)

    @property
    def empty(self) -> bool:
        return self._data.empty

    def readings(self) -> Iterator[Reading]:
        for ts, value in self._data.items():
            yield Reading(timestamp=ts, value=toOptional(value))

    def __iter__(self) -> Iterator[Reading]:
        return self.readings()

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, SiteSeries):
            return NotImplemented
        return (
            self._site == other._site
            and self._cadence == other._cadence
            and self._data.index.equals(other._data.index)
            and self._data.equals(other._data)
        )

    __hash__ = None

    def __repr__(self) -> str:
        span = f"{self.index[0]} - {self.index[-1]}" if len(self) else "empty"
        return (
            f"{self.__class__.__name__}(site={self._site!r}, "
            f"cadence={self._cadence}, slots={len(self)}, {span})"
        )


def _toPandas(raw) -> pd.Series:
    if isinstance(raw, pd.Series):
        s = raw.copy()
    else:
        pairs = list(raw)
        if pairs and any(len(p) != 2 for p in pairs):
            raise MalformedInputError("expected (timestamp, value) pairs")
        s = pd.Series(
            [v for _, v in pairs],
            index=[t for t, _ in pairs],
            dtype=object,
        )
    try:
        s.index = pd.DatetimeIndex(pd.to_datetime(s.index))
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"unparsable timestamps: {e}") from e
    s = s.where(s.notna(), np.nan)
    try:
        return s.astype(float)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"non-numeric values: {e}") from e


def normalize(
    raw: RawSeries,
    cadence: str | pd.Timedelta | None = None,
    site: str | None = None,
) -> SiteSeries:
    """
    Align a series of ``(timestamp, value)`` pairs to a fixed cadence.

    The result covers ``[min(timestamp), max(timestamp)]`` with one slot per
    cadence step. Values present in ``raw`` are kept, all other slots are
    inserted as missing.

    Parameters
    ----------
    raw :
        The readings, in ascending order. Either an iterable of
        ``(timestamp, value)`` pairs, a ``pandas.Series`` with a datetime
        index or an already normalized :py:class:`SiteSeries`. ``None`` and
        ``NaN`` values denote missing measurements.
    cadence :
        Fixed frequency of the series, e.g. ``"15min"`` or ``"1D"``. Can be
        omitted for ``pandas.Series`` with a regular index and for
        :py:class:`SiteSeries`.
    site :
        Name of the site. Defaults to the name of ``raw``.

    Returns
    -------
    SiteSeries

    Raises
    ------
    MalformedInputError
        If timestamps are duplicated, not ascending or not aligned to the
        cadence grid anchored at the first timestamp, or if values are
        not numeric.
    ValueError
        If no fixed, positive cadence is given or can be derived.
    """
    if isinstance(raw, SiteSeries):
        if site is None:
            site = raw.site
        if cadence is None:
            cadence = raw.cadence
        raw = raw.data
    elif site is None and isinstance(raw, pd.Series) and raw.name is not None:
        site = str(raw.name)

    s = _toPandas(raw)

    if cadence is None:
        cadence = getFreqDelta(s.index)
        if cadence is None:
            raise ValueError(
                f"site {site!r}: no cadence given and the index is not regularly sampled"
            )
    cadence = checkFreqStr(cadence)

    if s.index.has_duplicates:
        dupes = s.index[s.index.duplicated()].unique()
        raise MalformedInputError(
            f"site {site!r}: duplicated timestamps {list(dupes[:3])}"
        )
    if not s.index.is_monotonic_increasing:
        raise MalformedInputError(f"site {site!r}: timestamps are not ascending")

    off = offGrid(s.index, cadence)
    if off.any():
        raise MalformedInputError(
            f"site {site!r}: {off.sum()} timestamps do not match the cadence "
            f"{cadence}, first: {s.index[off][0]}"
        )

    if s.empty:
        return SiteSeries(
            pd.Series([], index=pd.DatetimeIndex([]), dtype=float), cadence, site
        )

    grid = pd.date_range(s.index[0], s.index[-1], freq=cadence)
    inserted = len(grid) - len(s)
    if inserted:
        logger.debug(f"site {site!r}: inserted {inserted} missing slots")

    return SiteSeries(s.reindex(grid), cadence, site)


def normalizeSites(
    raw: Mapping[str, RawSeries],
    cadences: Mapping[str, str | pd.Timedelta],
) -> dict[str, SiteSeries]:
    """Normalize every site of ``raw`` independently to the cadence given in ``cadences``."""
    out = {}
    for site, series in raw.items():
        if site not in cadences:
            raise KeyError(f"no cadence configured for site {site!r}")
        out[site] = normalize(series, cadences[site], site=site)
    return out
