"""
cli — command-line entry point for run-py-cli.

Entry points
────────────
  python -m run_py_cli   (via run_py_cli/__main__.py)
  run-py-cli             (via pyproject.toml [project.scripts])
"""

from run_py_cli.cli.main import build_parser, main

__all__ = ["build_parser", "main"]
