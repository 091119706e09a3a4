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
Project model: builds the task graph from a task list and schedules it.

Usage Example
-------------
>>> model = ProjectModel([('A', 3, []), ('B', 1, []), ('C', 2, ['A', 'B'])])
>>> model.horizon
5
>>> model.critical_tasks
['A', 'C']

The same project given as a dictionary with the dependencies as links:

>>> wbs = {
...     'A': {'duration': 3, 'name': 'Foundation'},
...     'B': {'duration': 1, 'name': 'Permits'},
...     'C': {'duration': 2, 'name': 'Walls'},
... }
>>> model = ProjectModel(wbs, links={'src': ['A', 'B'], 'dst': ['C', 'C']})
"""
import logging

import graphviz
import numpy as np
import pandas as pd

from .passes import backward_pass, compute_stages, forward_pass
from .schedule import Schedule
from .settings import settings as default_settings
from .task_graph import TaskGraph

logger = logging.getLogger(__name__)

#==============================================================================
def _parse_links(links):
    """
    Parse links from various formats into standard src, dst lists.

    Parameters
    ----------
    links : various
        - Two rows: ``[[src1, src2, ...], [dst1, dst2, ...]]``
        - Two columns: ``[[src1, dst1], [src2, dst2], ...]``
        - Dictionary: ``{'src': [src1, src2, ...], 'dst': [dst1, dst2, ...]}``

        ``src`` is the prerequisite of ``dst``.

    Returns
    -------
    tuple
        (src, dst) as lists

    Raises
    ------
    ValueError
        If links format is invalid

    Notes
    -----
    Two links in the two columns layout look like two rows, they are read as
    two rows.
    """
    if links is None:
        return [], []

    # Format 3: Dictionary {'src': [...], 'dst': [...]}
    if isinstance(links, dict):
        if 'src' in links and 'dst' in links:
            src, dst = list(links['src']), list(links['dst'])
        else:
            raise ValueError("Dictionary links must contain 'src' and 'dst' keys")

    # Format 1: Two rows [[src...], [dst...]]
    elif (isinstance(links, (list, tuple)) and len(links) == 2 and
            isinstance(links[0], (list, tuple, np.ndarray)) and
            isinstance(links[1], (list, tuple, np.ndarray))):
        src, dst = list(links[0]), list(links[1])

    # Format 2: Two columns [[src, dst], [src, dst], ...]
    elif (isinstance(links, (list, tuple, np.ndarray)) and
          len(links) > 0 and
          isinstance(links[0], (list, tuple, np.ndarray)) and
          len(links[0]) == 2):
        src = [item[0] for item in links]
        dst = [item[1] for item in links]

    elif isinstance(links, (list, tuple)) and 0 == len(links):
        return [], []

    else:
        raise ValueError(f"Unsupported links format: {type(links)}")

    if len(src) != len(dst):
        raise ValueError("Link sources and destinations differ in length")

    return src, dst

#==============================================================================
def _parse_tasks(tasks):
    """
    Normalize a task list into (id, duration, prerequisites, data) records.

    Parameters
    ----------
    tasks : sequence or dict
        Sequence of ``(id, duration, prerequisite_ids)`` tuples or a
        dictionary ``{id: {'duration': int, 'prerequisites': [...], ...}}``
        where all the other keys are kept as task data.

    Returns
    -------
    list
        List of ``(id, duration, prerequisites, data)`` tuples
    """
    if isinstance(tasks, dict):
        items = []
        for id, wbs_data in tasks.items():
            if not isinstance(wbs_data, dict):
                raise ValueError(f"Task '{id}' data must be a dictionary")
            data = wbs_data.copy()
            duration = data.pop('duration', 0)
            prerequisites = data.pop('prerequisites', ())
            items.append((id, duration, prerequisites, data))
        return items

    items = []
    for item in tasks:
        if 3 != len(item):
            raise ValueError(f"Task must be (id, duration, prerequisites), got {item!r}")
        id, duration, prerequisites = item
        items.append((id, duration, prerequisites, {}))
    return items

#==============================================================================
def _check_duration(id, duration):
    # Accept numpy integers and integral floats coming from pandas
    if isinstance(duration, bool):
        raise ValueError(f"Task '{id}' duration must be an integer, got {duration!r}")
    if isinstance(duration, (float, np.floating)):
        if not float(duration).is_integer():
            raise ValueError(f"Task '{id}' duration must be an integer, got {duration!r}")
    elif not isinstance(duration, (int, np.integer)):
        raise ValueError(f"Task '{id}' duration must be an integer, got {duration!r}")

    duration = int(duration)
    if duration < 0:
        raise ValueError(f"Task '{id}' duration must not be negative, got {duration}")
    return duration

#==============================================================================
class ProjectModel:
    """
    Critical path schedule of a project.

    Parameters
    ----------
    tasks : sequence or dict
        Tasks in submission order, either ``(id, duration, prerequisite_ids)``
        tuples or a dictionary ``{id: {'duration': ..., 'prerequisites': [...],
        ...}}``. Extra dictionary keys are stored as task data.
    links : various, optional
        Additional dependencies, see :func:`_parse_links`
    settings : Settings, optional
        Scheduler settings, the global settings by default

    Raises
    ------
    ValueError
        If a task id is not a non empty string, is declared twice or is
        referenced without being declared, or if a duration is not a non
        negative integer

    Attributes
    ----------
    graph : TaskGraph
        Scheduled task graph
    schedule : Schedule
        Result of the scheduling run
    """

    def __init__(self, tasks, links=None, settings=None):
        self.settings = settings or default_settings

        records = _parse_tasks(tasks)
        lnk_src, lnk_dst = _parse_links(links)

        self._create_graph(records, lnk_src, lnk_dst)

        # Compute task time parameters
        if forward_pass(self.graph):
            backward_pass(self.graph)
            compute_stages(self.graph)

        self.schedule = Schedule.from_graph(self.graph)

    #--------------------------------------------------------------------------
    def _create_graph(self, records, lnk_src, lnk_dst):
        self.graph = TaskGraph(self.settings.START_ID, self.settings.END_ID)

        # Declare all the tasks first, prerequisites may be forward references
        for id, duration, _, data in records:
            if not isinstance(id, str) or not id:
                raise ValueError(f"Task id must be a non empty string, got {id!r}")
            if id in self.graph.indexes:
                raise ValueError(f"Task '{id}' is declared more than once")
            self.graph.add_task(id, _check_duration(id, duration), data)

        def _index(id, user):
            try:
                return self.graph.get_index(id)
            except KeyError:
                raise ValueError(f"Unknown task '{id}' referenced by '{user}'") from None

        for id, _, prerequisites, _ in records:
            if prerequisites is None:
                prerequisites = ()
            if isinstance(prerequisites, str) or not hasattr(prerequisites, '__iter__'):
                raise ValueError(f"Task '{id}' prerequisites must be a sequence of ids")
            index = self.graph.get_index(id)
            for p in prerequisites:
                self.graph.add_dependency(index, _index(p, id))

        for src, dst in zip(lnk_src, lnk_dst):
            self.graph.add_dependency(_index(dst, src), _index(src, dst))

        self.graph.finalize()

    #--------------------------------------------------------------------------
    @property
    def cycle_detected(self):
        return self.schedule.cycle_detected

    @property
    def horizon(self):
        return self.schedule.horizon

    @property
    def critical_tasks(self):
        """Ids of critical tasks in input order."""
        return self.schedule.critical_ids

    def get_task(self, id):
        """
        Get task by id.

        Returns
        -------
        _Task or None
            Task with specified id or None if not found
        """
        index = self.graph.indexes.get(id)
        return None if index is None else self.graph.tasks[index]

    #--------------------------------------------------------------------------
    def __repr__(self):
        return repr(self.graph)

    def to_dict(self):
        """
        Convert project model to dictionary representation.

        Returns
        -------
        dict
            Schedule dictionary (see :meth:`Schedule.to_dict`) where every
            task also holds its duration, stage and data
        """
        ret = self.schedule.to_dict()
        for row in ret['tasks']:
            task = self.graph.get_task(row['id'])
            row['duration'] = task.duration
            row['stage'] = task.stage
            row['data'] = task.data.copy()
        return ret

    def to_dataframe(self):
        """
        Convert project model to a pandas DataFrame.

        Notes
        -----
        Custom task data fields are expanded into separate columns.
        """
        expanded = []
        for row in self.to_dict()['tasks']:
            task_data = {k: v for k, v in row.items() if k != 'data'}
            task_data.update(row['data'])
            expanded.append(task_data)

        if not expanded:
            return self.schedule.to_dataframe()

        return pd.DataFrame(expanded).set_index('id')

    #--------------------------------------------------------------------------
    def viz(self, output_path=None):
        """
        Create Graphviz visualization of the project network.

        Parameters
        ----------
        output_path : str, optional
            Path to render the visualization to, without extension. The
            format is ``settings.VIZ_FORMAT``.

        Returns
        -------
        graphviz.Digraph
            Graphviz object for rendering or saving

        Notes
        -----
        Tasks are nodes with their early/late times and reserve, critical
        tasks and the dependencies between them are red. Tasks of the same
        stage are drawn in one column. For a cyclic project only the task
        ids and durations are shown.
        """
        dot = graphviz.Digraph(node_attr={'shape': 'record', 'style': 'rounded'})
        dot.graph_attr['rankdir'] = 'LR'

        scheduled = not self.cycle_detected

        def _cl(task):
            """Choose color based on reserve (red for critical path)"""
            return '#ff0000' if scheduled and task.critical else '#000000'

        for t in self.graph.tasks:
            if self.graph.is_sentinel(t.index):
                dot.node(str(t.index), t.id, shape='circle', color=_cl(t))
            elif scheduled:
                dot.node(str(t.index),
                         '{%s | t=%d |{%d|%d}|{%d|%d}| r=%d}' % (t.id, t.duration,
                                                                 t.early_start, t.early_finish,
                                                                 t.late_start, t.late_finish,
                                                                 t.reserve),
                         color=_cl(t))
            else:
                dot.node(str(t.index), '{%s | t=%d}' % (t.id, t.duration))

        for t in self.graph.tasks:
            for c in t.children:
                child = self.graph.tasks[c]
                on_path = scheduled and t.critical and child.critical and \
                    t.early_finish == child.early_start
                dot.edge(str(t.index), str(c), color='#ff0000' if on_path else '#000000')

        # Tasks of the same stage share a rank
        if scheduled:
            stages = {}
            for t in self.graph.tasks:
                stages.setdefault(t.stage, []).append(t)
            for stage, tasks in sorted(stages.items()):
                with dot.subgraph(name=f'stage_{stage}') as s:
                    s.attr(rank='same')
                    for t in tasks:
                        s.node(str(t.index))

        if output_path is not None:
            dot.render(output_path, format=self.settings.VIZ_FORMAT, cleanup=True)

        return dot

#==============================================================================
def plan(tasks, links=None, settings=None):
    """
    Schedule a project.

    Parameters
    ----------
    tasks : sequence or dict
        See :class:`ProjectModel`

    Returns
    -------
    Schedule
        Per task schedule, or a schedule with ``cycle_detected`` set
    """
    return ProjectModel(tasks, links, settings).schedule
