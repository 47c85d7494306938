"""
runner — executes registry scripts through the configured interpreter.

Public API
──────────
RunResult       — captured stdout / stderr / exit status
ScriptRunner    — synchronous run(interpreter, script_path)
resolve_target  — picks the record target or the default script
"""

from run_py_cli.runner.models import RunResult
from run_py_cli.runner.script_runner import ScriptRunner, resolve_target

__all__ = ["RunResult", "ScriptRunner", "resolve_target"]
