"""
Event-type classification — ordered keyword rules, first match wins.
"""
from __future__ import annotations

import re

import pandas as pd

from storm_report.config import CATEGORY_RULES, UNKNOWN_LABEL

CATEGORY_NAMES = list(dict.fromkeys(category for _, category in CATEGORY_RULES))

_COMPILED_RULES = [(re.compile(pattern, re.IGNORECASE), category) for pattern, category in CATEGORY_RULES]


def _fallback_label(label) -> str:
    if label is None or pd.isna(label):
        return UNKNOWN_LABEL
    stripped = str(label).strip()
    return stripped or UNKNOWN_LABEL


def classify_event_type(label) -> str:
    """Return the canonical category for a raw EVTYPE label.

    Labels matching no rule keep their own (stripped) text.
    """
    text = _fallback_label(label)
    for rx, category in _COMPILED_RULES:
        if rx.search(text):
            return category
    return text


def assign_categories(df: pd.DataFrame, label_col: str = "event_type") -> pd.DataFrame:
    """Vectorized classify_event_type; adds ``category`` and ``is_categorized``."""
    labels = df[label_col].fillna("").astype(str).str.strip()

    category = pd.Series(pd.NA, index=df.index, dtype=object)
    for pattern, name in CATEGORY_RULES:
        hit = category.isna() & labels.str.contains(pattern, case=False, regex=True, na=False)
        category[hit] = name

    df["is_categorized"] = category.notna()
    fallback = labels.where(labels != "", UNKNOWN_LABEL)
    df["category"] = category.where(df["is_categorized"], fallback)
    return df


def uncategorized_pct(df: pd.DataFrame) -> float:
    """Percentage of records that fell back to their raw label."""
    if df.empty:
        return 0.0
    return float((~df["is_categorized"]).mean() * 100)


def uncategorized_labels(df: pd.DataFrame, top_n: int = 20) -> pd.DataFrame:
    """Most frequent raw labels that matched no rule."""
    unmatched = df.loc[~df["is_categorized"], "category"]
    if unmatched.empty:
        return pd.DataFrame(columns=["label", "events"])
    counts = unmatched.value_counts().head(top_n)
    return pd.DataFrame({"label": counts.index.astype(str), "events": counts.values.astype(int)})


def category_legend() -> list[tuple[str, str]]:
    """(category, keywords) pairs in rule order, for report legends."""
    legend = []
    for pattern, category in CATEGORY_RULES:
        keywords = re.sub(r"\\b|\(\?!\w+\)", "", pattern)
        legend.append((category, keywords.replace("|", ", ")))
    return legend
