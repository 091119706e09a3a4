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
Configuration settings for the project scheduler.

Values come from environment variables prefixed with PLAN_CPM_, optionally
loaded from a .env file in the working directory.
"""
import os
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = 'PLAN_CPM_'
LOG_LEVELS = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']

# Load environment variables from .env file
env_file = Path.cwd() / '.env'
if env_file.exists():
    load_dotenv(env_file)

#==============================================================================
def _env(name, default):
    return os.getenv(ENV_PREFIX + name, default)

#==============================================================================
class Settings:
    """Scheduler settings loaded from environment variables."""

    def __init__(self):
        # Logging
        self.LOG_LEVEL = _env('LOG_LEVEL', 'WARNING').upper()

        # Planning table
        self.COLUMN_WIDTH  = int(_env('COLUMN_WIDTH', '6'))
        self.CRITICAL_MARK = _env('CRITICAL_MARK', '*')
        self.CYCLE_MESSAGE = _env('CYCLE_MESSAGE', 'Project contains cycles')

        # Sentinel task names
        self.START_ID = _env('START_ID', 'START')
        self.END_ID   = _env('END_ID', 'END')

        # Graphviz output
        self.VIZ_FORMAT = _env('VIZ_FORMAT', 'png')

        if self.COLUMN_WIDTH < 1:
            raise ValueError(f"{ENV_PREFIX}COLUMN_WIDTH must be positive, got {self.COLUMN_WIDTH}")
        if self.LOG_LEVEL not in LOG_LEVELS:
            raise ValueError(f"{ENV_PREFIX}LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {self.LOG_LEVEL!r}")

    def __repr__(self):
        fields = ', '.join(f'{k}={v!r}' for k, v in vars(self).items())
        return f'Settings({fields})'


# Global settings instance
settings = Settings()
