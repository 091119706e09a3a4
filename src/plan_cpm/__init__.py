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
PlanCPM - critical path scheduling of projects
==============================================

Given tasks with durations and prerequisites, computes the earliest and
latest start and finish of every task, the project horizon and the critical
tasks, or reports that the dependencies contain a cycle.

>>> from plan_cpm import plan
>>> schedule = plan([('A', 3, []), ('B', 2, ['A'])])
>>> schedule.horizon
5
>>> schedule['B'].early_start
3
"""
from .passes import backward_pass, compute_stages, forward_pass
from .project_model import ProjectModel, plan
from .reader import ProjectFormatError, read_project, read_table
from .schedule import Schedule, ScheduleRow
from .settings import Settings
from .task_graph import TaskGraph

__version__ = '0.1.0'
__all__ = [
    'ProjectModel',
    'plan',
    'TaskGraph',
    'forward_pass',
    'backward_pass',
    'compute_stages',
    'Schedule',
    'ScheduleRow',
    'ProjectFormatError',
    'read_project',
    'read_table',
    'Settings',
]
