"""GitHub REST API access for the workflow debugger."""

from workflow_debugger.github.client import GitHubClient
from workflow_debugger.github.fetchers import ResourceFetcher

__all__ = ["GitHubClient", "ResourceFetcher"]
