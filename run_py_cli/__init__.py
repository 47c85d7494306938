"""run-py-cli — interactive terminal launcher for Python scripts."""

__version__ = "0.1.0"
