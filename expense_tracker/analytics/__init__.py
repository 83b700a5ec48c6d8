"""Filtered summaries and category/month analysis."""
from .summary import AnalysisResult, CategoryTotal, SummaryResult, analyze, summarize
