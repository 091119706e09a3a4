#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
    PlanCPM
    Copyright (C) 2025 anonimous

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    You should have received a copy of the GNU General Public License
    along with this program.  If not, see <http://www.gnu.org/licenses/>.

    Please contact with me by E-mail: shkolnick.kun@gmail.com
"""
"""
Readers of project descriptions.

Textual format
--------------
The first token is the number of tasks ``n``, then ``n`` task records
follow::

    id duration next_1 next_2 ... next_k @

where ``next_i`` are the tasks that can not start before this one
finishes. Tokens are separated by any whitespace, so a record may span
several lines. Tasks may be referenced before they are declared.

Tabular format
--------------
A CSV file or a pandas DataFrame with the columns ``id``, ``duration`` and
optionally ``prerequisites`` (ids separated by whitespace, commas or
semicolons). Any other column is kept as task data.
"""
import logging
import re

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

END_MARK = '@'

_ID_SEPARATORS = re.compile(r'[\s,;]+')

#==============================================================================
class ProjectFormatError(ValueError):
    """Malformed project description."""

#==============================================================================
def _read_int(tokens, what):
    tok = next(tokens, None)
    if tok is None:
        raise ProjectFormatError(f"Unexpected end of input, expected {what}")
    try:
        val = int(tok)
    except ValueError:
        raise ProjectFormatError(f"Expected {what}, got '{tok}'") from None
    if val < 0:
        raise ProjectFormatError(f"{what[0].upper()}{what[1:]} must not be negative, got {val}")
    return val

#==============================================================================
def read_project(source):
    """
    Read a project in the textual format.

    Parameters
    ----------
    source : str or file-like
        Project text or a stream to read it from

    Returns
    -------
    list
        ``(id, duration, prerequisite_ids)`` tuples in declaration order

    Raises
    ------
    ProjectFormatError
        If the text is malformed
    """
    text = source.read() if hasattr(source, 'read') else source
    tokens = iter(text.split())

    n = _read_int(tokens, 'task count')

    durations = {}
    followers = []
    for _ in range(n):
        id = next(tokens, None)
        if id is None:
            raise ProjectFormatError(f"Unexpected end of input, expected {n} tasks, got {len(durations)}")
        if END_MARK == id:
            raise ProjectFormatError(f"Expected a task id, got '{END_MARK}'")
        if id in durations:
            raise ProjectFormatError(f"Task '{id}' is declared more than once")

        durations[id] = _read_int(tokens, f"duration of task '{id}'")

        nxt = []
        for tok in tokens:
            if END_MARK == tok:
                break
            nxt.append(tok)
        else:
            raise ProjectFormatError(f"Task '{id}' record is not terminated by '{END_MARK}'")
        followers.append((id, nxt))

    rest = list(tokens)
    if rest:
        raise ProjectFormatError(f"Unexpected tokens after {n} tasks: {' '.join(rest[:5])}")

    # Invert "must finish before" lists into prerequisite lists
    prerequisites = {id: [] for id in durations}
    for id, nxt in followers:
        for f in nxt:
            if f not in prerequisites:
                raise ProjectFormatError(f"Task '{id}' refers to undeclared task '{f}'")
            prerequisites[f].append(id)

    logger.debug("Read %d tasks", n)
    return [(id, durations[id], prerequisites[id]) for id in durations]

#==============================================================================
def _split_ids(cell):
    if isinstance(cell, (list, tuple, np.ndarray)):
        return [str(i) for i in cell]
    if pd.isna(cell):
        return []
    return [i for i in _ID_SEPARATORS.split(str(cell).strip()) if i]

def _to_python(val):
    # numpy scalars do not survive json.dumps
    return val.item() if isinstance(val, np.generic) else val

#==============================================================================
def read_table(source):
    """
    Read a project from a CSV file or a DataFrame.

    Parameters
    ----------
    source : str, path, file-like or pandas.DataFrame
        CSV source or a ready DataFrame

    Returns
    -------
    dict
        ``{id: {'duration': int, 'prerequisites': [...], **data}}`` in row
        order, ready for :class:`plan_cpm.ProjectModel`

    Raises
    ------
    ProjectFormatError
        If columns are missing, a duration is not a non negative integer,
        an id is repeated or a prerequisite is not declared
    """
    if isinstance(source, pd.DataFrame):
        df = source.copy()
    else:
        df = pd.read_csv(source, dtype={'id': str, 'prerequisites': str}, keep_default_na=False)

    missing = {'id', 'duration'} - set(df.columns)
    if missing:
        raise ProjectFormatError(f"Missing columns: {', '.join(sorted(missing))}")

    df['id'] = df['id'].astype(str).str.strip()
    dup = df['id'][df['id'].duplicated()]
    if len(dup):
        raise ProjectFormatError(f"Task '{dup.iloc[0]}' is declared more than once")

    durations = pd.to_numeric(df['duration'], errors='coerce')
    bad = df['id'][durations.isna() | (durations < 0) | (durations % 1 != 0)]
    if len(bad):
        raise ProjectFormatError(f"Task '{bad.iloc[0]}' duration must be a non negative integer")
    df['duration'] = durations.astype(int)

    if 'prerequisites' not in df.columns:
        df['prerequisites'] = ''

    ret = {}
    for row in df.to_dict('records'):
        id = row.pop('id')
        row['duration'] = int(row['duration'])
        row['prerequisites'] = _split_ids(row['prerequisites'])
        ret[id] = {k: _to_python(v) for k, v in row.items()}

    for id, task in ret.items():
        for p in task['prerequisites']:
            if p not in ret:
                raise ProjectFormatError(f"Task '{id}' refers to undeclared task '{p}'")

    logger.debug("Read %d tasks from table", len(ret))
    return ret
