"""
JSON helpers shared by analytics and reports.
"""
from __future__ import annotations

import math

import numpy as np
import pandas as pd


def safe_sum(series: pd.Series) -> float:
    """Sum a numeric Series as a plain float, 0.0 when empty or all-NaN."""
    if series.empty:
        return 0.0
    total = float(series.sum())
    return 0.0 if math.isnan(total) else total


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        clean = {}
        for k, v in obj.items():
            if k is None:
                continue
            if isinstance(k, float) and (math.isnan(k) or math.isinf(k)):
                continue
            clean[str(k) if not isinstance(k, str) else k] = sanitize_for_json(v)
        return clean
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, (np.integer,)):
        return int(obj)
    if isinstance(obj, (np.floating,)):
        v = float(obj)
        return 0.0 if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, float):
        return 0.0 if (math.isnan(obj) or math.isinf(obj)) else obj
    if isinstance(obj, pd.Timestamp):
        return obj.date().isoformat()
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
