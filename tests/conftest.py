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
import numpy as np
import pytest

from plan_cpm import TaskGraph


def build_graph(tasks):
    """Build a finalized graph from (id, duration, prerequisites) tuples."""
    graph = TaskGraph()
    for id, duration, _ in tasks:
        graph.add_task(id, duration)
    for id, _, prerequisites in tasks:
        for p in prerequisites:
            graph.add_dependency(graph.get_index(id), graph.get_index(p))
    graph.finalize()
    return graph


def random_dag(seed, n_tasks=30, max_prerequisites=4, max_duration=9):
    """Random acyclic project, prerequisites always have lower numbers."""
    rng = np.random.default_rng(seed)
    tasks = []
    for i in range(n_tasks):
        k = int(rng.integers(0, min(i, max_prerequisites) + 1))
        prerequisites = sorted({f'T{j}' for j in rng.choice(i, size=k, replace=False)}) if k else []
        tasks.append((f'T{i}', int(rng.integers(0, max_duration + 1)), prerequisites))
    return tasks


@pytest.fixture
def scenario_a():
    return [('A', 3, []), ('B', 2, ['A'])]


@pytest.fixture
def scenario_b():
    return [('A', 3, []), ('B', 1, []), ('C', 2, ['A', 'B'])]


@pytest.fixture
def scenario_c():
    return [('A', 1, ['B']), ('B', 1, ['A'])]


@pytest.fixture
def scenario_d():
    return [('A', 5, [])]


@pytest.fixture
def building():
    """Small construction project with two parallel branches."""
    return [
        ('design',     4, []),
        ('permits',    6, []),
        ('foundation', 5, ['design', 'permits']),
        ('frame',      7, ['foundation']),
        ('plumbing',   3, ['frame']),
        ('electrical', 2, ['frame']),
        ('walls',      4, ['plumbing', 'electrical']),
        ('garden',     2, ['design']),
    ]
