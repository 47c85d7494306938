"""Allow ``python -m run_py_cli``."""

from run_py_cli.cli.main import main

raise SystemExit(main())
