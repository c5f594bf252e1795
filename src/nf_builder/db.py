import sqlite3
from typing import Iterable, List, Optional, Tuple

from .config import get_db_path
from .decomposition import Order, OrderItem
from .expansion import OutputRecord


def _connect(path: Optional[str] = None):
    conn = sqlite3.connect(path or get_db_path())
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


# OrderID must stay INT: INTEGER PRIMARY KEY aliases rowid and rejects text ids.
# Writers replace their tables in a single transaction.


def write_product_items(conn, items: Iterable[OutputRecord]) -> None:
    with conn:
        conn.execute("BEGIN")
        conn.execute("DROP TABLE IF EXISTS ProductItems")
        conn.execute(
            """CREATE TABLE ProductItems (OrderID INT, CustomerName TEXT, Product TEXT)"""
        )
        conn.executemany(
            "INSERT INTO ProductItems VALUES (?,?,?)",
            [(i.identifier, i.label, i.item) for i in items],
        )


def write_orders(
    conn, orders: Iterable[Order], order_items: Iterable[OrderItem]
) -> None:
    with conn:
        conn.execute("BEGIN")
        # child first, OrderItems references Orders
        conn.execute("DROP TABLE IF EXISTS OrderItems")
        conn.execute("DROP TABLE IF EXISTS Orders")
        conn.execute(
            """CREATE TABLE Orders (OrderID INT PRIMARY KEY, CustomerName TEXT)"""
        )
        conn.execute(
            """CREATE TABLE OrderItems (OrderID INT, Product TEXT, Quantity INTEGER, PRIMARY KEY (OrderID, Product), FOREIGN KEY (OrderID) REFERENCES Orders(OrderID))"""
        )
        conn.executemany(
            "INSERT INTO Orders VALUES (?,?)",
            [(o.order_id, o.customer_name) for o in orders],
        )
        conn.executemany(
            "INSERT INTO OrderItems VALUES (?,?,?)",
            [(oi.order_id, oi.item, oi.quantity) for oi in order_items],
        )


def join_orders(conn) -> List[Tuple]:
    cur = conn.cursor()
    cur.execute(
        """SELECT o.OrderID, o.CustomerName, oi.Product, oi.Quantity
        FROM Orders o JOIN OrderItems oi ON o.OrderID = oi.OrderID
        ORDER BY o.OrderID, oi.Product"""
    )
    return cur.fetchall()
