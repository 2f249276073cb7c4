"""Allow running workflow_debugger as a module: python -m workflow_debugger."""

from workflow_debugger.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
