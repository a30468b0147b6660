"""Output formatters for GitHub Showcase."""

from github_showcase.output.console import Console
from github_showcase.output.json_writer import build_report, write_json_report

__all__ = ["Console", "build_report", "write_json_report"]
