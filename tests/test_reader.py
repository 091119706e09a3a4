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
import io

import pandas as pd
import pytest

from plan_cpm import ProjectFormatError, ProjectModel, read_project, read_table

PROJECT = """3
A 3 C @
B 1 C @
C 2 @
"""


def test_read_project_inverts_successor_lists():
    assert read_project(PROJECT) == [('A', 3, []), ('B', 1, []), ('C', 2, ['A', 'B'])]


def test_read_project_from_stream():
    assert read_project(io.StringIO(PROJECT))[2] == ('C', 2, ['A', 'B'])


def test_records_may_span_lines_and_refer_forward():
    text = "2\nfirst\n4\nsecond\n@ second 1\n@\n"
    assert read_project(text) == [('first', 4, []), ('second', 1, ['first'])]


def test_read_project_feeds_project_model():
    model = ProjectModel(read_project(PROJECT))
    assert model.horizon == 5
    assert model.critical_tasks == ['A', 'C']


def test_empty_project():
    assert read_project('0') == []


@pytest.mark.parametrize('text', [
    '',
    'x',
    '-1',
    '2\nA 1 @\n',
    '1\nA @',
    '1\nA -2 @',
    '1\nA x @',
    '1\nA 1 B',
    '1\nA 1 B @',
    '2\nA 1 @\nA 2 @',
    '1\n@ 1 @',
    '1\nA 1 @ B',
])
def test_malformed_text(text):
    with pytest.raises(ProjectFormatError):
        read_project(text)


def test_format_error_is_value_error():
    assert issubclass(ProjectFormatError, ValueError)


CSV = """id,duration,prerequisites,name
A,3,,Foundation
B,1,,Permits
C,2,A;B,Walls
"""


def test_read_table_csv():
    wbs = read_table(io.StringIO(CSV))
    assert list(wbs) == ['A', 'B', 'C']
    assert wbs['C'] == {'duration': 2, 'prerequisites': ['A', 'B'], 'name': 'Walls'}
    assert wbs['A']['prerequisites'] == []

    model = ProjectModel(wbs)
    assert model.horizon == 5
    assert model.to_dataframe().loc['B', 'name'] == 'Permits'


def test_read_table_csv_file(tmp_path):
    path = tmp_path / 'project.csv'
    path.write_text(CSV)
    assert read_table(path)['C']['duration'] == 2


def test_read_table_dataframe():
    df = pd.DataFrame({
        'id': ['A', 'B', 'C'],
        'duration': [3, 1, 2],
        'prerequisites': [[], None, 'A, B'],
    })
    wbs = read_table(df)
    assert wbs['B']['prerequisites'] == []
    assert wbs['C']['prerequisites'] == ['A', 'B']
    assert isinstance(wbs['A']['duration'], int)


def test_read_table_without_prerequisites_column():
    wbs = read_table(pd.DataFrame({'id': ['A'], 'duration': [4.0]}))
    assert wbs == {'A': {'duration': 4, 'prerequisites': []}}


@pytest.mark.parametrize('df', [
    pd.DataFrame({'id': ['A'], 'time': [1]}),
    pd.DataFrame({'id': ['A'], 'duration': [-1]}),
    pd.DataFrame({'id': ['A'], 'duration': [1.5]}),
    pd.DataFrame({'id': ['A'], 'duration': ['x']}),
    pd.DataFrame({'id': ['A', 'A'], 'duration': [1, 2]}),
    pd.DataFrame({'id': ['A'], 'duration': [1], 'prerequisites': ['B']}),
])
def test_malformed_table(df):
    with pytest.raises(ProjectFormatError):
        read_table(df)
