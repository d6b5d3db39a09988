"""
Safe math and JSON helpers used across analytics and reports.
"""
from __future__ import annotations

import math

import numpy as np
import pandas as pd


def safe_divide(numerator: float, denominator: float, default: float = 0.0) -> float:
    """Divide safely, returning default if denominator is zero or NaN."""
    if denominator == 0 or pd.isna(denominator):
        return default
    result = numerator / denominator
    return default if pd.isna(result) else result


def pct_of_total(part: float, total: float) -> float:
    """Percentage of total."""
    return safe_divide(part, total) * 100


def fillna_numeric(df: pd.DataFrame, value=0) -> pd.DataFrame:
    """Fill NaN with value for numeric columns only."""
    num_cols = df.select_dtypes(include="number").columns
    if len(num_cols):
        df = df.copy()
        df[num_cols] = df[num_cols].fillna(value)
    return df


def sanitize_for_json(obj):
    """Recursively convert numpy/pandas types to native Python for JSON serialization."""
    if isinstance(obj, dict):
        clean = {}
        for k, v in obj.items():
            if k is None:
                continue
            if isinstance(k, (float, np.floating)) and (math.isnan(float(k)) or math.isinf(float(k))):
                continue
            clean[k if isinstance(k, str) else str(k)] = sanitize_for_json(v)
        return clean
    if isinstance(obj, (list, tuple)):
        return [sanitize_for_json(v) for v in obj]
    if isinstance(obj, pd.DataFrame):
        return sanitize_for_json(obj.to_dict("records"))
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, (float, np.floating)):
        v = float(obj)
        return 0.0 if (math.isnan(v) or math.isinf(v)) else v
    if isinstance(obj, np.ndarray):
        return sanitize_for_json(obj.tolist())
    if isinstance(obj, pd.Timestamp):
        return obj.isoformat()
    if pd.api.types.is_scalar(obj) and pd.isna(obj):
        return None
    return obj
