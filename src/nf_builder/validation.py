"""Validation utilities for normalized tables."""

from __future__ import annotations

from collections import Counter
from dataclasses import asdict
from typing import Any, Dict, Iterable, List

import pandas as pd

from .decomposition import OrderDetail
from .expansion import DEFAULT_DELIMITER, candidate_count

FLAT_COLUMNS = ["order_id", "customer_name", "item", "quantity"]


def to_frame(items: Iterable[Any], columns: List[str]) -> pd.DataFrame:
    return pd.DataFrame([asdict(i) for i in items], columns=columns)


def check_first_normal_form(
    rows: List[Dict[str, str]], column: str, delimiter: str = DEFAULT_DELIMITER
) -> List[str]:
    issues: List[str] = []
    for idx, r in enumerate(rows, start=1):
        value = r.get(column) or ""
        if candidate_count(value, delimiter) > 1:
            issues.append(
                f"Row {idx}: {column} holds multiple values ({value!r})."
            )
    return issues


def check_partial_dependency(details: List[OrderDetail]) -> List[str]:
    names: Dict[Any, set] = {}
    for d in details:
        names.setdefault(d.order_id, set()).add(d.customer_name)
    return [
        f"Order {oid}: customer name is not determined by order id ({', '.join(sorted(n))})."
        for oid, n in names.items()
        if len(n) > 1
    ]


def _row_counts(df: pd.DataFrame) -> Counter:
    return Counter(df[FLAT_COLUMNS].astype(str).itertuples(index=False, name=None))


def check_lossless_join(
    flat: pd.DataFrame, orders: pd.DataFrame, order_items: pd.DataFrame
) -> List[str]:
    """Join orders with order_items and compare against flat as multisets.

    All frames use snake_case columns (order_id, customer_name, item, quantity).
    Values are compared as strings so CSV-loaded and in-memory frames agree.
    """
    issues: List[str] = []
    order_ids = set(orders["order_id"].astype(str))
    dangling = order_items[~order_items["order_id"].astype(str).isin(order_ids)]
    for _, row in dangling.iterrows():
        issues.append(
            f"Order item {row['item']} references missing order {row['order_id']}."
        )
    left = orders.astype({"order_id": str})
    right = order_items.astype({"order_id": str})
    joined = left.merge(right, on="order_id", how="inner")
    expected = _row_counts(flat)
    actual = _row_counts(joined)
    for row, n in (expected - actual).items():
        issues.append(f"Lost row after join: {row} (x{n}).")
    for row, n in (actual - expected).items():
        issues.append(f"Spurious row after join: {row} (x{n}).")
    return issues
