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
import pytest

from plan_cpm import backward_pass, compute_stages, forward_pass

from conftest import build_graph, random_dag


def schedule_graph(tasks):
    graph = build_graph(tasks)
    assert forward_pass(graph)
    backward_pass(graph)
    return graph


def times(graph, id):
    t = graph.get_task(id)
    return t.early_start, t.early_finish, t.late_start, t.late_finish


def test_scenario_a(scenario_a):
    graph = schedule_graph(scenario_a)
    assert times(graph, 'A') == (0, 3, 0, 3)
    assert times(graph, 'B') == (3, 5, 3, 5)
    assert graph.end.early_finish == 5
    assert all(t.critical for t in graph.real_tasks)


def test_scenario_b(scenario_b):
    graph = schedule_graph(scenario_b)
    assert graph.get_task('C').early_start == 3
    assert graph.end.early_finish == 5
    assert graph.get_task('A').critical
    assert graph.get_task('C').critical
    assert not graph.get_task('B').critical
    assert graph.get_task('B').reserve == 2


def test_scenario_c_reports_cycle(scenario_c):
    graph = build_graph(scenario_c)
    assert forward_pass(graph) is False
    assert graph.acyclic is False


def test_scenario_d(scenario_d):
    graph = schedule_graph(scenario_d)
    assert times(graph, 'A') == (0, 5, 0, 5)
    assert graph.get_task('A').critical
    assert graph.end.late_finish == 5


def test_building_project(building):
    graph = schedule_graph(building)
    assert graph.end.early_finish == 25
    assert times(graph, 'foundation') == (6, 11, 6, 11)
    assert times(graph, 'electrical') == (18, 20, 19, 21)
    assert times(graph, 'design') == (0, 4, 2, 6)
    assert times(graph, 'garden') == (4, 6, 23, 25)
    assert [t.id for t in graph.real_tasks if t.critical] == \
        ['permits', 'foundation', 'frame', 'plumbing', 'walls']


def test_cycle_behind_acyclic_prefix():
    tasks = [('A', 1, []), ('B', 1, ['A', 'D']), ('C', 1, ['B']), ('D', 1, ['C']), ('E', 1, ['A'])]
    assert forward_pass(build_graph(tasks)) is False


def test_self_dependency_is_a_cycle():
    assert forward_pass(build_graph([('A', 1, ['A'])])) is False


def test_cycle_is_logged(scenario_c, caplog):
    forward_pass(build_graph(scenario_c))
    assert 'Cycle detected' in caplog.text


def test_backward_pass_needs_successful_forward_pass(scenario_a, scenario_c):
    with pytest.raises(RuntimeError):
        backward_pass(build_graph(scenario_a))

    graph = build_graph(scenario_c)
    forward_pass(graph)
    with pytest.raises(RuntimeError):
        backward_pass(graph)


def test_forward_pass_needs_finalized_graph():
    from plan_cpm import TaskGraph
    graph = TaskGraph()
    graph.add_task('A', 1)
    with pytest.raises(RuntimeError):
        forward_pass(graph)


def test_empty_project_has_zero_horizon():
    graph = build_graph([])
    assert forward_pass(graph)
    assert backward_pass(graph) == 0


def test_zero_duration_tasks():
    graph = schedule_graph([('A', 0, []), ('B', 0, ['A']), ('C', 4, [])])
    assert graph.end.early_finish == 4
    assert times(graph, 'B') == (0, 0, 4, 4)
    assert graph.get_task('C').critical


def test_duplicate_edges_do_not_change_times(scenario_b):
    dup = [('A', 3, []), ('B', 1, []), ('C', 2, ['A', 'B', 'A', 'B'])]
    plain, doubled = schedule_graph(scenario_b), schedule_graph(dup)
    for id in 'ABC':
        assert times(plain, id) == times(doubled, id)


def test_stages_follow_longest_chain(building):
    graph = schedule_graph(building)
    compute_stages(graph)
    stage = {t.id: t.stage for t in graph.real_tasks}
    assert stage['design'] == stage['permits'] == 1
    assert stage['foundation'] == 2
    assert stage['garden'] == 2
    assert stage['walls'] == 5
    assert graph.end.stage == 6


def test_stages_need_acyclic_graph(scenario_c):
    graph = build_graph(scenario_c)
    forward_pass(graph)
    with pytest.raises(RuntimeError):
        compute_stages(graph)


def test_unknown_target():
    from plan_cpm.passes import _compute_target
    with pytest.raises(ValueError):
        _compute_target(build_graph([]), 'slack')


@pytest.mark.parametrize('seed', range(10))
def test_random_projects_satisfy_cpm_recurrences(seed):
    tasks = random_dag(seed)
    graph = schedule_graph(tasks)
    horizon = graph.end.early_finish

    assert graph.end.late_finish == horizon
    assert horizon == max(t.early_finish for t in graph.real_tasks)
    assert graph.start.critical and graph.end.critical

    for t in graph.tasks:
        if t.index != 0:
            assert t.early_start == max(graph.tasks[p].early_finish for p in t.prerequisites)
        if t.index != graph.end.index:
            assert t.late_finish == min(graph.tasks[c].late_start for c in t.children)
        assert t.reserve >= 0

    assert any(t.critical for t in graph.real_tasks)


@pytest.mark.parametrize('seed', range(10))
def test_random_projects_with_back_edge_are_cyclic(seed):
    tasks = random_dag(seed)

    # Chain T0 -> T5 -> T10 and close it with T10 -> T0
    tasks[5] = (tasks[5][0], tasks[5][1], sorted(set(tasks[5][2]) | {'T0'}))
    tasks[10] = (tasks[10][0], tasks[10][1], sorted(set(tasks[10][2]) | {'T5'}))
    tasks[0] = ('T0', tasks[0][1], ['T10'])

    assert forward_pass(build_graph(tasks)) is False
