"""Tabular and file export of analysis results."""

from .export import curves_to_frame, export_csv, export_json, results_to_frame

__all__ = ["curves_to_frame", "results_to_frame", "export_csv", "export_json"]
