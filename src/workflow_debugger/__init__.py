"""workflow-debugger - GitHub Actions failure diagnosis tools for AI assistants."""

__version__ = "1.0.0"

from workflow_debugger.classification import COMMON_WORKFLOW_ISSUES, classify
from workflow_debugger.service import WorkflowDebugger

__all__ = [
    "COMMON_WORKFLOW_ISSUES",
    "WorkflowDebugger",
    "classify",
]
