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
Forward and backward passes of the critical path method.

Both passes are FIFO topological traversals driven by dependency counters:
a task is taken from the queue only after every task it depends on in the
traversal direction was taken, so its value is final when it is processed.
"""
import logging

import numpy as np

from .task_graph import TaskGraph

logger = logging.getLogger(__name__)

#==============================================================================
def _compute_target(graph, target):
    """
    Propagate a CPM parameter through the graph in topological order.

    Parameters
    ----------
    graph : TaskGraph
        Finalized task graph
    target : str
        What to compute: 'early', 'late' or 'stage'

    Returns
    -------
    list
        Indices of the visited tasks in visiting order

    Raises
    ------
    ValueError
        If target parameter is invalid
    """
    if 'early' == target:
        attr   = 'early_start'
        fwd    = 'children'
        rev    = 'prerequisites'
        seed   = 0
        choice = max
        delta  = lambda t: t.duration

    elif 'late' == target:
        attr   = 'late_finish'
        fwd    = 'prerequisites'
        rev    = 'children'
        seed   = len(graph) - 1
        choice = min
        delta  = lambda t: -t.duration

    elif 'stage' == target:
        attr   = 'stage'
        fwd    = 'children'
        rev    = 'prerequisites'
        seed   = 0
        choice = max
        delta  = lambda t: 1

    else:
        raise ValueError("Unknown 'target' value!!!")

    # Count not yet visited dependencies, edges are counted with multiplicity
    n_dep = np.fromiter((len(getattr(t, rev)) for t in graph.tasks),
                        dtype=np.int64, count=len(graph))

    # The seed is the only task without dependencies in a finalized graph
    pending = [seed]

    i = 0
    while i < len(pending):
        task = graph.tasks[pending[i]]
        new_val = getattr(task, attr) + delta(task)

        for j in getattr(task, fwd):
            nxt = graph.tasks[j]
            setattr(nxt, attr, choice(getattr(nxt, attr), new_val))

            n_dep[j] -= 1
            if 0 == n_dep[j]:
                pending.append(j)

        i += 1

    return pending

#==============================================================================
def forward_pass(graph):
    """
    Compute early start times and detect cycles.

    Parameters
    ----------
    graph : TaskGraph
        Finalized task graph

    Returns
    -------
    bool
        True on success, False if the graph contains a cycle. In the latter
        case early times are meaningless and the backward pass must not run.
    """
    assert isinstance(graph, TaskGraph)
    if not graph.finalized:
        raise RuntimeError("The graph must be finalized before scheduling!!!")

    for t in graph.tasks:
        t.early_start = 0

    visited = _compute_target(graph, 'early')

    # Tasks on a cycle never get all their prerequisites visited
    graph.acyclic = len(visited) == len(graph)

    if graph.acyclic:
        logger.debug("Forward pass done, horizon is %d", graph.end.early_finish)
    else:
        seen = set(visited)
        stuck = [t.id for t in graph.tasks if t.index not in seen]
        logger.warning("Cycle detected, %d tasks were not scheduled: %s",
                       len(stuck), ', '.join(stuck))

    return graph.acyclic

#==============================================================================
def backward_pass(graph):
    """
    Compute late finish times.

    The END task late finish is set to its early finish (the project
    horizon), every other task starts from the horizon and is tightened
    while the reversed graph is traversed.

    Parameters
    ----------
    graph : TaskGraph
        Graph a successful :func:`forward_pass` was run on

    Returns
    -------
    int
        Project horizon
    """
    assert isinstance(graph, TaskGraph)
    if not graph.acyclic:
        raise RuntimeError("Backward pass needs a successful forward pass!!!")

    horizon = graph.end.early_finish
    for t in graph.tasks:
        t.late_finish = horizon

    visited = _compute_target(graph, 'late')

    # Check for programming errors
    if len(visited) != len(graph):
        raise RuntimeError("Backward pass did not visit all the tasks!!!")

    for t in graph.tasks:
        if t.reserve < 0:
            raise RuntimeError("Tasks can not have negative time reserves!!!")

    logger.debug("Backward pass done, %d critical tasks",
                 sum(1 for t in graph.tasks if t.critical))
    return horizon

#==============================================================================
def compute_stages(graph):
    """
    Number each task with the length of the longest task chain leading to it.

    START is stage 0. Needs an acyclic graph.
    """
    assert isinstance(graph, TaskGraph)
    if not graph.acyclic:
        raise RuntimeError("Stages can be computed for acyclic graphs only!!!")

    for t in graph.tasks:
        t.stage = 0

    _compute_target(graph, 'stage')
