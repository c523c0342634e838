"""
GitHub Integration Module

Reference parsing and the REST client used to fetch check statuses.
"""

from .models import Project, ProjectURL, parse_project_url, pull_request_id
from .client import GitHubClient

__all__ = [
    "Project",
    "ProjectURL",
    "parse_project_url",
    "pull_request_id",
    "GitHubClient",
]
