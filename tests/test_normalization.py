import csv, os, sqlite3, tempfile

import pytest

from nf_builder import normalize_order_details, normalize_product_details

FILES = os.path.join(os.path.dirname(__file__), "..", "files")
PRODUCT_CSV = os.path.join(FILES, "ProductDetail.csv")
ORDER_CSV = os.path.join(FILES, "OrderDetails.csv")


def _read_csv(path):
    with open(path, "r", encoding="utf-8") as f:
        return list(csv.DictReader(f))


def test_product_details_to_first_normal_form():
    assert os.path.exists(PRODUCT_CSV), "Input CSV missing."
    with tempfile.TemporaryDirectory() as tmp:
        db_path = os.path.join(tmp, "nf.db")
        summary = normalize_product_details(PRODUCT_CSV, tmp, db_path)
        assert summary == {"records": 3, "items": 6}
        rows = _read_csv(os.path.join(tmp, "product_items.csv"))
        assert [(r["order_id"], r["product"]) for r in rows] == [
            ("101", "Laptop"),
            ("101", "Mouse"),
            ("102", "Tablet"),
            ("102", "Keyboard"),
            ("102", "Mouse"),
            ("103", "Phone"),
        ]
        conn = sqlite3.connect(db_path)
        try:
            count = conn.execute("SELECT COUNT(*) FROM ProductItems").fetchone()[0]
        finally:
            conn.close()
        assert count == 6


def test_product_details_strip(tmp_path):
    src = tmp_path / "pd.csv"
    src.write_text(
        'OrderID,CustomerName,Products\n101,John Doe,"Laptop, Mouse, "\n',
        encoding="utf-8",
    )
    summary = normalize_product_details(str(src), str(tmp_path / "out"), strip=True)
    assert summary["items"] == 2
    rows = _read_csv(str(tmp_path / "out" / "product_items.csv"))
    assert [r["product"] for r in rows] == ["Laptop", "Mouse"]


def test_empty_csv_rejected(tmp_path):
    src = tmp_path / "empty.csv"
    src.write_text("", encoding="utf-8")
    with pytest.raises(ValueError):
        normalize_product_details(str(src), str(tmp_path / "out"))


def test_missing_column_rejected(tmp_path):
    src = tmp_path / "bad.csv"
    src.write_text("OrderID,CustomerName\n101,John Doe\n", encoding="utf-8")
    with pytest.raises(ValueError, match="Products"):
        normalize_product_details(str(src), str(tmp_path / "out"))


def test_order_details_to_second_normal_form():
    with tempfile.TemporaryDirectory() as tmp:
        db_path = os.path.join(tmp, "nf.db")
        summary = normalize_order_details(ORDER_CSV, tmp, db_path)
        assert summary == {"rows": 6, "orders": 3, "order_items": 6}
        for fname in ["orders.csv", "order_items.csv"]:
            assert os.path.exists(os.path.join(tmp, fname))
        orders = _read_csv(os.path.join(tmp, "orders.csv"))
        assert [o["customer_name"] for o in orders] == [
            "John Doe",
            "Jane Smith",
            "Emily Clark",
        ]
        conn = sqlite3.connect(db_path)
        try:
            n = conn.execute(
                "SELECT COUNT(*) FROM Orders o JOIN OrderItems oi ON o.OrderID = oi.OrderID"
            ).fetchone()[0]
        finally:
            conn.close()
        assert n == 6


def test_order_details_with_text_ids_to_sqlite(tmp_path):
    src = tmp_path / "od.csv"
    src.write_text(
        "OrderID,CustomerName,Product,Quantity\nA1,John Doe,Laptop,2\nA1,John Doe,Mouse,1\n",
        encoding="utf-8",
    )
    db_path = str(tmp_path / "nf.db")
    summary = normalize_order_details(str(src), str(tmp_path / "out"), db_path)
    assert summary == {"rows": 2, "orders": 1, "order_items": 2}
    conn = sqlite3.connect(db_path)
    try:
        ids = conn.execute("SELECT OrderID FROM Orders").fetchall()
    finally:
        conn.close()
    assert ids == [("A1",)]
