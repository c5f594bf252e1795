"""File-level normalization drivers.

normalize_product_details(input_csv, out_dir, sqlite_path=None) splits the
Products column of a ProductDetail CSV into one row per product (1NF).
normalize_order_details(input_csv, out_dir, sqlite_path=None) decomposes an
OrderDetails CSV into orders and order items (2NF).
Both return a summary dict of row counts.
"""

from __future__ import annotations

import csv
import logging
import os
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from .db import _connect, write_orders, write_product_items
from .decomposition import OrderDetail, decompose
from .expansion import DEFAULT_DELIMITER, InputRecord, expand_records

PRODUCT_DETAIL_COLUMNS = ["OrderID", "CustomerName", "Products"]
ORDER_DETAIL_COLUMNS = ["OrderID", "CustomerName", "Product", "Quantity"]

logger = logging.getLogger(__name__)


# ----------------- helpers -----------------


def read_table(input_csv: str, columns: List[str]) -> List[Dict[str, str]]:
    with open(input_csv, "r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        rows = list(reader)
        header = reader.fieldnames or []
    if not header:
        raise ValueError("Empty CSV")
    missing = [c for c in columns if c not in header]
    if missing:
        raise ValueError(f"{input_csv}: missing column(s) {', '.join(missing)}")
    return rows


def parse_id(value: str) -> Any:
    v = value.strip()
    try:
        return int(v)
    except ValueError:
        return v


def load_order_details(input_csv: str) -> List[OrderDetail]:
    rows = read_table(input_csv, ORDER_DETAIL_COLUMNS)
    return [
        OrderDetail(
            parse_id(r["OrderID"]),
            r["CustomerName"],
            r["Product"],
            int(r["Quantity"]),
        )
        for r in rows
    ]


def write_csv(path: str, fieldnames: List[str], rows: List[Dict[str, Any]]) -> None:
    if not rows:
        open(path, "w").close()
        return
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for r in rows:
            w.writerow(r)


# ----------------- main normalization API -----------------


def normalize_product_details(
    input_csv: str,
    out_dir: str,
    sqlite_path: Optional[str] = None,
    delimiter: str = DEFAULT_DELIMITER,
    strip: bool = False,
) -> Dict[str, Any]:
    rows = read_table(input_csv, PRODUCT_DETAIL_COLUMNS)
    records = [
        InputRecord(parse_id(r["OrderID"]), r["CustomerName"], r["Products"])
        for r in rows
    ]
    items = expand_records(records, delimiter, strip)

    os.makedirs(out_dir, exist_ok=True)
    write_csv(
        os.path.join(out_dir, "product_items.csv"),
        ["order_id", "customer_name", "product"],
        [
            {"order_id": i.identifier, "customer_name": i.label, "product": i.item}
            for i in items
        ],
    )

    if sqlite_path:
        conn = _connect(sqlite_path)
        try:
            write_product_items(conn, items)
        finally:
            conn.close()
        logger.info("Wrote %d product items to %s", len(items), sqlite_path)

    return {"records": len(records), "items": len(items)}


def normalize_order_details(
    input_csv: str, out_dir: str, sqlite_path: Optional[str] = None
) -> Dict[str, Any]:
    details = load_order_details(input_csv)
    orders, order_items = decompose(details)

    os.makedirs(out_dir, exist_ok=True)
    write_csv(
        os.path.join(out_dir, "orders.csv"),
        ["order_id", "customer_name"],
        [asdict(o) for o in orders],
    )
    write_csv(
        os.path.join(out_dir, "order_items.csv"),
        ["order_id", "item", "quantity"],
        [asdict(oi) for oi in order_items],
    )

    if sqlite_path:
        conn = _connect(sqlite_path)
        try:
            write_orders(conn, orders, order_items)
        finally:
            conn.close()
        logger.info(
            "Wrote %d orders and %d order items to %s",
            len(orders),
            len(order_items),
            sqlite_path,
        )

    return {
        "rows": len(details),
        "orders": len(orders),
        "order_items": len(order_items),
    }
