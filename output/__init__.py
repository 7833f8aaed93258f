# -*- coding: utf-8 -*-
"""
Output Package
==============

Centralises all persistence logic: CSV/JSON data and orchestration thereof.

Quick start::

    from output import OutputOrchestrator
    orch = OutputOrchestrator('result')
    orch.save_all(problem, aras_result, execution_time)
"""

from .csv_writer import CsvWriter
from .orchestrator import OutputOrchestrator

__all__ = ['CsvWriter', 'OutputOrchestrator']
