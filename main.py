#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
Fuzzy ARAS Analysis: Main Entry Point
=====================================

Usage
-----
    python main.py                          # default 4 x 5 x 4 problem
    python main.py problem.json             # problem from a JSON file
    python main.py problem.json --output out --no-export

Pipeline Phases
---------------
1. Problem Loading & Validation : JSON file or default problem
2. Fuzzy ARAS Calculation        : aggregation, normalisation, utility
3. Result Export                 : CSV / JSON in <output>/results
"""

import argparse
import sys
import traceback
from pathlib import Path
from typing import List, Optional


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='fuzzy-aras',
        description='Rank alternatives with Fuzzy ARAS from linguistic expert judgments.',
    )
    parser.add_argument('problem', nargs='?', default=None,
                        help='JSON problem file (default: built-in default problem)')
    parser.add_argument('--output', '-o', default='result',
                        help='output directory name (default: result)')
    parser.add_argument('--no-export', action='store_true',
                        help='skip writing CSV / JSON result files')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Configure and execute the Fuzzy ARAS pipeline."""
    args = build_parser().parse_args(argv)

    # ------------------------------------------------------------------
    # Lazy imports (avoids heavy loading on --help)
    # ------------------------------------------------------------------
    from config import get_default_config, set_config
    from pipeline import FuzzyARASPipeline

    config = get_default_config()
    output = Path(args.output)
    config.paths.base_dir = output.parent
    config.paths.output_name = output.name
    config.output.export = not args.no_export
    set_config(config)

    # ------------------------------------------------------------------
    # Execute
    # ------------------------------------------------------------------
    pipeline = FuzzyARASPipeline(config)

    try:
        result = pipeline.run(args.problem)
    except Exception as e:
        pipeline.console.error(f"{type(e).__name__}: {e}")
        traceback.print_exc()
        return 1

    pipeline.console.show_run_summary(result)
    if config.output.export:
        pipeline.console.show_completion(config.output_dir)
    return 0


if __name__ == '__main__':
    sys.exit(main())
