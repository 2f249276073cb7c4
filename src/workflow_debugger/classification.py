"""Heuristic classification of failed workflow steps.

Step names are matched against a fixed priority chain of case-insensitive
substring triggers. The first matching rule selects exactly one category;
when nothing matches, two general categories are suggested together.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CommonWorkflowIssue:
    """A known failure category with a canned solution."""

    type: str
    description: str
    solution: str


COMMON_WORKFLOW_ISSUES: tuple[CommonWorkflowIssue, ...] = (
    CommonWorkflowIssue(
        type="node-setup-failure",
        description="Node.js setup step is failing",
        solution=(
            "Check the Node.js version specified in your workflow file. "
            "Make sure it's a valid version and the syntax is correct."
        ),
    ),
    CommonWorkflowIssue(
        type="checkout-failure",
        description="Checkout action is failing",
        solution=(
            "Ensure you're using the correct checkout action version "
            "and that your repository has the necessary permissions."
        ),
    ),
    CommonWorkflowIssue(
        type="dependency-installation-failure",
        description="Dependency installation is failing",
        solution=(
            "Check your package.json for invalid dependencies or version conflicts. "
            "Make sure your package-lock.json is committed."
        ),
    ),
    CommonWorkflowIssue(
        type="build-failure",
        description="Build step is failing",
        solution=(
            "Review build logs for compilation errors. Check if your build command "
            "is correct and all required environment variables are set."
        ),
    ),
    CommonWorkflowIssue(
        type="test-failure",
        description="Tests are failing",
        solution=(
            "Review test logs to identify which tests are failing and why. "
            "Fix the failing tests or update expected test results."
        ),
    ),
    CommonWorkflowIssue(
        type="permission-denied",
        description="Permission denied errors",
        solution=(
            "Check if your workflow has the necessary permissions. You might need "
            "to update the 'permissions' section in your workflow file."
        ),
    ),
    CommonWorkflowIssue(
        type="resource-limit-exceeded",
        description="Resource limits exceeded",
        solution=(
            "Your workflow might be hitting GitHub Actions resource limits. "
            "Consider optimizing your workflow or splitting it into smaller jobs."
        ),
    ),
    CommonWorkflowIssue(
        type="invalid-workflow-syntax",
        description="Invalid workflow syntax",
        solution=(
            "Check your workflow file for syntax errors. Make sure indentation "
            "is correct and all required fields are present."
        ),
    ),
)

_ISSUES_BY_TYPE = {issue.type: issue for issue in COMMON_WORKFLOW_ISSUES}

# Checked in order; the first rule with a matching trigger wins
CLASSIFICATION_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("node", "setup-node"), "node-setup-failure"),
    (("checkout",), "checkout-failure"),
    (("install", "npm", "yarn"), "dependency-installation-failure"),
    (("build",), "build-failure"),
    (("test",), "test-failure"),
)

FALLBACK_ISSUE_TYPES: tuple[str, ...] = ("invalid-workflow-syntax", "permission-denied")


def get_issue(issue_type: str) -> CommonWorkflowIssue:
    """Look up a category by its type identifier.

    Raises:
        KeyError: If the type is not in the table.
    """
    return _ISSUES_BY_TYPE[issue_type]


def classify(step_name: str) -> list[CommonWorkflowIssue]:
    """
    Suggest likely causes for a failed step based on its name.

    Args:
        step_name: Name of the failed step.

    Returns:
        One matching category, or the two fallback categories when no
        trigger matches.
    """
    lowered = step_name.lower()
    for triggers, issue_type in CLASSIFICATION_RULES:
        if any(trigger in lowered for trigger in triggers):
            return [get_issue(issue_type)]
    return [get_issue(issue_type) for issue_type in FALLBACK_ISSUE_TYPES]
