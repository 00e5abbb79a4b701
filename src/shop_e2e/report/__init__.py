"""Report module - HTML report and summary from Cucumber JSON results."""

from .generator import ReportGenerator
from .summary import find_result_files, load_results, parse_features, summarize

__all__ = ["ReportGenerator", "find_result_files", "load_results", "parse_features", "summarize"]
