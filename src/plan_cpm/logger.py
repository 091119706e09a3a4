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
"""Logging configuration for the scheduler command line."""
import logging

from .settings import settings

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def configure_logging(level=None, stream=None):
    """
    Configure the package logger.

    Parameters
    ----------
    level : str or int, optional
        Log level, defaults to settings.LOG_LEVEL
    stream : file-like, optional
        Where to write records, defaults to stderr

    Returns
    -------
    logging.Logger
        The configured plan_cpm logger
    """
    logger = logging.getLogger('plan_cpm')
    logger.setLevel(level if level is not None else settings.LOG_LEVEL)

    # Drop handlers left from a previous call
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(console_handler)

    return logger
