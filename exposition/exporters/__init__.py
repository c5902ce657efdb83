"""Exporters that write parsed metrics back out"""
from .prometheus import PrometheusTextExporter

__all__ = ["PrometheusTextExporter"]
