#!/usr/bin/env python3
"""
Create a small SQLite shop database to point SQL Chat at.

    python scripts/seed_demo_db.py [path]

Defaults to scripts/demo.db, which is also the default DB_FILE_PATH.
Re-running replaces the file.
"""
import random
import sqlite3
import sys
from datetime import date, timedelta
from pathlib import Path

DEFAULT_PATH = Path(__file__).parent / "demo.db"

SCHEMA = """
CREATE TABLE customers (
    id       INTEGER PRIMARY KEY,
    name     TEXT NOT NULL,
    country  TEXT
);
CREATE TABLE products (
    id        INTEGER PRIMARY KEY,
    name      TEXT NOT NULL,
    category  TEXT,
    price     DECIMAL(10, 2) NOT NULL
);
CREATE TABLE orders (
    id           INTEGER PRIMARY KEY,
    customer_id  INTEGER REFERENCES customers(id),
    ordered_on   DATE,
    status       TEXT,
    total        DECIMAL(10, 2)
);
CREATE TABLE order_items (
    order_id    INTEGER REFERENCES orders(id),
    product_id  INTEGER REFERENCES products(id),
    quantity    INTEGER NOT NULL
);
-- a view, so /schema/refresh can be seen skipping non-base tables
CREATE VIEW revenue_by_country AS
    SELECT c.country, SUM(o.total) AS revenue
    FROM orders o JOIN customers c ON c.id = o.customer_id
    GROUP BY c.country;
"""

COUNTRIES = ("TH", "US", "DE", "JP", "BR")
CATEGORIES = ("Coffee", "Tea", "Snacks", "Merch")
STATUSES = ("NEW", "PAID", "SHIPPED", "REFUNDED")


def build(path: Path, n_customers: int = 50, n_products: int = 20, n_orders: int = 300) -> None:
    rng = random.Random(42)
    path.unlink(missing_ok=True)

    with sqlite3.connect(path) as conn:
        conn.executescript(SCHEMA)
        conn.executemany(
            "INSERT INTO customers VALUES (?, ?, ?)",
            [(i, f"Customer {i}", rng.choice(COUNTRIES)) for i in range(1, n_customers + 1)],
        )
        prices = {i: round(rng.uniform(2, 80), 2) for i in range(1, n_products + 1)}
        conn.executemany(
            "INSERT INTO products VALUES (?, ?, ?, ?)",
            [(i, f"Product {i}", rng.choice(CATEGORIES), p) for i, p in prices.items()],
        )

        start = date.today() - timedelta(days=365)
        for order_id in range(1, n_orders + 1):
            items = [(order_id, rng.choice(list(prices)), rng.randint(1, 3)) for _ in range(rng.randint(1, 4))]
            total = round(sum(prices[pid] * qty for _, pid, qty in items), 2)
            conn.execute(
                "INSERT INTO orders VALUES (?, ?, ?, ?, ?)",
                (order_id, rng.randint(1, n_customers), (start + timedelta(days=rng.randint(0, 365))).isoformat(),
                 rng.choice(STATUSES), total),
            )
            conn.executemany("INSERT INTO order_items VALUES (?, ?, ?)", items)

    print(f"Seeded {path}: {n_customers} customers, {n_products} products, {n_orders} orders")


if __name__ == "__main__":
    build(Path(sys.argv[1]) if len(sys.argv) > 1 else DEFAULT_PATH)
