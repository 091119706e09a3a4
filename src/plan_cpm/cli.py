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
Command line entry point: reads a project, prints its planning table.
"""
import argparse
import json
import logging
import sys

import graphviz

from .logger import configure_logging
from .project_model import ProjectModel
from .reader import read_project, read_table
from .settings import LOG_LEVELS, settings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CYCLE = 1
EXIT_BAD_INPUT = 2


def build_parser():
    ap = argparse.ArgumentParser(prog='plan-cpm',
                                 description='Critical path schedule of a project')
    ap.add_argument('input', nargs='?', default='-',
                    help="project file, '-' for standard input (default)")
    ap.add_argument('--input-format', choices=['text', 'csv'],
                    help='input format, guessed from the file suffix by default')
    ap.add_argument('--format', choices=['table', 'csv', 'json'], default='table',
                    help='output format (default: table)')
    ap.add_argument('--viz', metavar='PATH',
                    help='render the project network with graphviz to PATH')
    ap.add_argument('--log-level', default=settings.LOG_LEVEL, type=str.upper,
                    choices=LOG_LEVELS,
                    help='log level (default: %(default)s)')
    return ap


def _load(path, input_format):
    if input_format is None:
        input_format = 'csv' if path.lower().endswith('.csv') else 'text'

    if '-' == path:
        if 'csv' == input_format:
            return read_table(sys.stdin)
        return read_project(sys.stdin)

    if 'csv' == input_format:
        return read_table(path)
    with open(path, encoding='utf-8') as f:
        return read_project(f)


def main(argv=None):
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        tasks = _load(args.input, args.input_format)
        model = ProjectModel(tasks)
    except (ValueError, OSError) as e:
        print(f'plan-cpm: {e}', file=sys.stderr)
        return EXIT_BAD_INPUT

    if args.viz:
        try:
            model.viz(output_path=args.viz)
            logger.info("Network rendered to %s.%s", args.viz, settings.VIZ_FORMAT)
        except graphviz.ExecutableNotFound as e:
            logger.error("Could not render the network: %s", e)

    schedule = model.schedule
    if schedule.cycle_detected:
        sys.stdout.write(schedule.format_table())
        return EXIT_CYCLE

    if 'json' == args.format:
        print(json.dumps(schedule.to_dict(), indent=2))
    elif 'csv' == args.format:
        sys.stdout.write(schedule.to_dataframe().to_csv())
    else:
        sys.stdout.write(schedule.format_table())

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
