"""Shared exceptions for the workflow_debugger package."""


class MissingTokenError(Exception):
    """Exception raised when no GitHub credential is configured.

    Only raised at startup. API calls made while the credential is absent
    report a failed fetch instead.
    """

    def __init__(self) -> None:
        super().__init__(
            "GITHUB_PERSONAL_ACCESS_TOKEN environment variable is not set. "
            "Please set it to a valid GitHub Personal Access Token with "
            "appropriate permissions."
        )
