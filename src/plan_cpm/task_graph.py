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
Task graph of a project
=======================

Tasks live in a flat list and refer to each other by list index. Index 0 is
the START sentinel, the last index is the END sentinel which is appended by
:meth:`TaskGraph.finalize`. Both sentinels take no time, so after
finalization every real task has at least one prerequisite and at least one
child and both passes can treat all tasks alike.
"""
import logging

logger = logging.getLogger(__name__)

#==============================================================================
class _Task:
    """
    A task of the project.

    Parameters
    ----------
    id : str
        Task identifier
    index : int
        Position of the task in the graph task list
    duration : int
        Processing time, non negative

    Attributes
    ----------
    children : list
        Indices of tasks this task is a prerequisite of
    prerequisites : list
        Indices of tasks that must finish before this task starts
    early_start : int
        Earliest start time (computed by the forward pass)
    late_finish : int
        Latest finish time (computed by the backward pass)
    stage : int
        Number of tasks on the longest chain from START to this task
    data : dict
        Extra task data, carried through to exports
    """

    def __init__(self, id, index, duration=0, data=None):
        assert isinstance(id, str)
        assert isinstance(index, int)
        assert isinstance(duration, int)
        assert duration >= 0
        assert data is None or isinstance(data, dict)

        self.id = id
        self.index = index
        self.duration = duration
        self.data = data if data is not None else {}

        self.children = []
        self.prerequisites = []

        # CPM parameters (calculated later)
        self.early_start = 0
        self.late_finish = 0
        self.stage = 0

    @property
    def early_finish(self):
        return self.early_start + self.duration

    @property
    def late_start(self):
        return self.late_finish - self.duration

    @property
    def reserve(self):
        """Time reserve (slack) of the task."""
        return self.late_start - self.early_start

    @property
    def critical(self):
        return self.early_finish == self.late_finish

    #--------------------------------------------------------------------------
    def __repr__(self):
        return str(self.to_dict())

    #--------------------------------------------------------------------------
    def to_dict(self):
        """
        Convert task to dictionary representation.

        Returns
        -------
        dict
            Task data, the data entry is a copy
        """
        return {
            'id'           : self.id,
            'index'        : self.index,
            'duration'     : self.duration,
            'stage'        : self.stage,
            'prerequisites': list(self.prerequisites),
            'children'     : list(self.children),
            # CPM things
            'early_start'  : self.early_start,
            'early_finish' : self.early_finish,
            'late_start'   : self.late_start,
            'late_finish'  : self.late_finish,
            'reserve'      : self.reserve,
            'critical'     : self.critical,
            # Additional data copy
            'data'         : self.data.copy()
        }

#==============================================================================
class TaskGraph:
    """
    Dependency graph of project tasks.

    Parameters
    ----------
    start_id : str, default='START'
        Name of the START sentinel
    end_id : str, default='END'
        Name of the END sentinel

    Attributes
    ----------
    tasks : list
        List of _Task objects, START first and END last once finalized
    indexes : dict
        Maps real task ids to their indices, sentinels are not included
    finalized : bool
        True after :meth:`finalize` was called
    acyclic : bool or None
        Outcome of the last forward pass, None if it has not run yet
    """

    def __init__(self, start_id='START', end_id='END'):
        assert isinstance(start_id, str)
        assert isinstance(end_id, str)

        self.tasks = [_Task(start_id, 0)]
        self.indexes = {}
        self.finalized = False
        self.acyclic = None
        self._end_id = end_id

        # (task, prerequisite) pairs added so far, to flag duplicates
        self._edges = set()

    #--------------------------------------------------------------------------
    def __len__(self):
        return len(self.tasks)

    @property
    def start(self):
        return self.tasks[0]

    @property
    def end(self):
        if not self.finalized:
            raise RuntimeError("The END task exists only in a finalized graph!!!")
        return self.tasks[-1]

    @property
    def real_tasks(self):
        """Non sentinel tasks in the order they were added."""
        return self.tasks[1:1 + len(self.indexes)]

    def is_sentinel(self, index):
        return 0 == index or (self.finalized and len(self.tasks) - 1 == index)

    def get_index(self, id):
        """Return the index of task *id*, raise KeyError if it is unknown."""
        return self.indexes[id]

    def get_task(self, id):
        return self.tasks[self.indexes[id]]

    #--------------------------------------------------------------------------
    def add_task(self, id, duration=None, data=None):
        """
        Reserve an index for task *id*.

        If the id has been seen before the previously reserved index is
        returned, otherwise a new task without edges is appended.

        Parameters
        ----------
        id : str
            Task identifier
        duration : int, optional
            When given, stored as the task duration
        data : dict, optional
            When given, stored as the task data

        Returns
        -------
        int
            Task index
        """
        if self.finalized:
            raise RuntimeError("Can not add tasks to a finalized graph!!!")

        index = self.indexes.get(id)
        if index is None:
            index = len(self.tasks)
            self.indexes[id] = index
            self.tasks.append(_Task(id, index))

        task = self.tasks[index]
        if duration is not None:
            assert isinstance(duration, int)
            assert duration >= 0
            task.duration = duration
        if data is not None:
            assert isinstance(data, dict)
            task.data = data

        return index

    #--------------------------------------------------------------------------
    def add_dependency(self, task_index, prerequisite_index):
        """
        Make task *prerequisite_index* a prerequisite of task *task_index*.

        Duplicate edges are kept, both passes count them with their
        multiplicity.
        """
        if self.finalized:
            raise RuntimeError("Can not add dependencies to a finalized graph!!!")

        assert 0 < task_index < len(self.tasks)
        assert 0 < prerequisite_index < len(self.tasks)

        task = self.tasks[task_index]
        prerequisite = self.tasks[prerequisite_index]

        edge = (task_index, prerequisite_index)
        if edge in self._edges:
            logger.warning("Duplicate dependency %s -> %s", prerequisite.id, task.id)
        else:
            self._edges.add(edge)

        task.prerequisites.append(prerequisite_index)
        prerequisite.children.append(task_index)

    #--------------------------------------------------------------------------
    def finalize(self):
        """
        Append the END task and anchor the graph with the sentinels.

        Every real task without prerequisites becomes a child of START and
        every real task without children becomes a prerequisite of END.
        """
        if self.finalized:
            raise RuntimeError("The graph is already finalized!!!")

        start = self.tasks[0]
        end = _Task(self._end_id, len(self.tasks))
        self.tasks.append(end)
        self.finalized = True

        for task in self.tasks[1:end.index]:
            if not task.prerequisites:
                start.children.append(task.index)
                task.prerequisites.append(start.index)

            if not task.children:
                end.prerequisites.append(task.index)
                task.children.append(end.index)

        # Empty project
        if not self.indexes:
            start.children.append(end.index)
            end.prerequisites.append(start.index)

        logger.debug("Finalized graph with %d tasks", len(self.tasks))

    #--------------------------------------------------------------------------
    def __repr__(self):
        _repr = 'Tasks:{\n'
        for t in self.tasks:
            _repr += '        ' + str(t) + '\n'
        _repr += '}\n'
        return _repr
