"""Exporters for converting graphs and analysis results to output formats."""

from .json_exporter import to_json, analysis_to_json

__all__ = ["to_json", "analysis_to_json"]
