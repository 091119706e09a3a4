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
Project schedule, the result of a scheduling run.
"""
from collections import namedtuple

import pandas as pd

from .settings import settings as default_settings

ROW_FIELDS = ['id', 'early_start', 'early_finish', 'late_start', 'late_finish', 'critical']

#==============================================================================
class ScheduleRow(namedtuple('ScheduleRow', ROW_FIELDS)):
    """Schedule of a single task."""
    __slots__ = ()

    @property
    def slack(self):
        return self.late_start - self.early_start

#==============================================================================
class Schedule:
    """
    Per task schedule of a project.

    Parameters
    ----------
    rows : list of ScheduleRow
        Rows in input task order
    horizon : int or None
        Minimum project completion time, None for cyclic projects
    cycle_detected : bool
        True if the project dependencies contain a cycle

    Notes
    -----
    A cyclic project has no rows and no horizon.
    """

    def __init__(self, rows=(), horizon=None, cycle_detected=False):
        self.rows = list(rows)
        self.horizon = horizon
        self.cycle_detected = cycle_detected

        assert not (cycle_detected and self.rows)
        assert cycle_detected or horizon is not None

        self._by_id = {r.id: r for r in self.rows}

    #--------------------------------------------------------------------------
    @classmethod
    def from_graph(cls, graph):
        """
        Collect the schedule of the real tasks of a scheduled graph.

        Parameters
        ----------
        graph : TaskGraph
            Graph after the forward and backward passes

        Returns
        -------
        Schedule
        """
        if not graph.acyclic:
            return cls.cyclic()

        rows = [ScheduleRow(t.id, t.early_start, t.early_finish,
                            t.late_start, t.late_finish, t.critical)
                for t in graph.real_tasks]

        end = graph.end
        assert end.early_finish == end.late_finish
        return cls(rows, end.early_finish)

    @classmethod
    def cyclic(cls):
        return cls(cycle_detected=True)

    #--------------------------------------------------------------------------
    def __len__(self):
        return len(self.rows)

    def __iter__(self):
        return iter(self.rows)

    def __getitem__(self, id):
        return self._by_id[id]

    def __contains__(self, id):
        return id in self._by_id

    def __repr__(self):
        if self.cycle_detected:
            return 'Schedule(cycle_detected=True)'
        return f'Schedule(horizon={self.horizon}, tasks={len(self.rows)})'

    @property
    def critical_ids(self):
        """Ids of critical tasks in input order."""
        return [r.id for r in self.rows if r.critical]

    #--------------------------------------------------------------------------
    def to_dict(self):
        """
        Convert schedule to dictionary representation.

        Returns
        -------
        dict
            Dictionary with structure:

            .. code-block:: python

                {
                    'cycle_detected': bool,
                    'horizon': int or None,
                    'tasks': [
                        {row1_data},
                        ...
                    ]
                }
        """
        tasks = []
        for r in self.rows:
            row = r._asdict()
            row['slack'] = r.slack
            tasks.append(row)

        return {
            'cycle_detected': self.cycle_detected,
            'horizon': self.horizon,
            'tasks': tasks
        }

    def to_dataframe(self):
        """
        Convert schedule to a pandas DataFrame indexed by task id.
        """
        df = pd.DataFrame(self.to_dict()['tasks'], columns=ROW_FIELDS + ['slack'])
        return df.set_index('id')

    #--------------------------------------------------------------------------
    def format_table(self, settings=None):
        """
        Render the planning table.

        Each line holds the task id, early start, early finish, late start
        and late finish, every column left aligned and padded to
        ``settings.COLUMN_WIDTH`` characters, followed by the critical
        mark for critical tasks. A cyclic project renders as the cycle
        message.

        Returns
        -------
        str
            Table text, lines end with a newline
        """
        settings = settings or default_settings

        if self.cycle_detected:
            return settings.CYCLE_MESSAGE + '\n'

        w = settings.COLUMN_WIDTH
        lines = []
        for r in self.rows:
            line = ''.join(f'{v!s:<{w}}' for v in r[:5])
            if r.critical:
                line += settings.CRITICAL_MARK
            lines.append(line + '\n')

        return ''.join(lines)
