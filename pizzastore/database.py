"""database gateway: one sqlite connection, three statement operations"""
# --sql is used for syntax highlighting inline sql queries
import logging
import sqlite3
from contextlib import contextmanager
from typing import Iterator, Sequence

from .config import DEFAULT_MANAGER_LOGIN, DEFAULT_MANAGER_PASSWORD
from .errors import DatabaseConnectionError, StatementError
from .models import ItemType, Role

logger = logging.getLogger(__name__)

Row = list[str | None]


class DatabaseManager:
    """manage the sqlite connection, schema and statement execution"""
    def __init__(self, path: str):
        try:
            self.conn = sqlite3.connect(path)
            self.conn.autocommit = True
            self.conn.execute("--sql\nPRAGMA foreign_keys=ON;")
            self._create_schema()
            self._seed_stores()
            self._seed_items()
            self._seed_default_manager()
        except sqlite3.Error as e:
            raise DatabaseConnectionError(f"unable to connect to database: {e}") from e
        logger.info("connected to %s", path)

    def _create_schema(self):
        """create tables if missing"""
        self.conn.executescript(
            """--sql
            CREATE TABLE IF NOT EXISTS Users (
                login TEXT PRIMARY KEY,
                password TEXT NOT NULL, -- plaintext, compared for equality
                role TEXT NOT NULL DEFAULT 'customer',
                favoriteItems TEXT,
                phoneNum TEXT
            );
            CREATE TABLE IF NOT EXISTS Items (
                itemName TEXT PRIMARY KEY,
                ingredients TEXT NOT NULL,
                typeOfItem TEXT NOT NULL,
                price REAL NOT NULL CHECK (price >= 0),
                description TEXT
            );
            CREATE TABLE IF NOT EXISTS Store (
                storeID INTEGER PRIMARY KEY,
                address TEXT NOT NULL,
                city TEXT NOT NULL,
                state TEXT NOT NULL,
                isOpen TEXT NOT NULL DEFAULT 'yes',
                reviewScore REAL
            );
            CREATE TABLE IF NOT EXISTS FoodOrder (
                orderID INTEGER PRIMARY KEY AUTOINCREMENT,
                login TEXT NOT NULL REFERENCES Users(login) ON UPDATE CASCADE,
                storeID INTEGER NOT NULL REFERENCES Store(storeID),
                totalPrice REAL NOT NULL,
                orderTimestamp TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
                orderStatus TEXT NOT NULL DEFAULT 'incomplete'
            );
            -- no foreign key on itemName: items may be deleted while still ordered
            CREATE TABLE IF NOT EXISTS ItemsInOrder (
                orderID INTEGER NOT NULL REFERENCES FoodOrder(orderID) ON DELETE CASCADE,
                itemName TEXT NOT NULL,
                quantity INTEGER NOT NULL CHECK (quantity > 0),
                PRIMARY KEY (orderID, itemName)
            );
            """
        )

    def _seed_stores(self):
        """seed a few stores once"""
        stores = [
            (1, "1 Main St", "Riverside", "CA", "yes", 4.5),
            (2, "22 Market St", "San Francisco", "CA", "yes", 4.1),
            (3, "300 Broadway", "New York", "NY", "no", 3.8),
            (4, "45 Lake Shore Dr", "Chicago", "IL", "yes", 4.7),
        ]
        self.conn.executemany(
            """--sql
            INSERT OR IGNORE INTO Store(storeID, address, city, state, isOpen, reviewScore)
            VALUES(?, ?, ?, ?, ?, ?);
            """,
            stores
        )

    def _seed_items(self):
        """seed default menu once"""
        items = [
            ("Margherita", "tomato, mozzarella, basil", ItemType.ENTREE.value, 9.00, "the classic"),
            ("Pepperoni", "tomato, mozzarella, pepperoni", ItemType.ENTREE.value, 11.50, "spicy favourite"),
            ("Hawaiian", "tomato, mozzarella, ham, pineapple", ItemType.ENTREE.value, 12.00, "controversial"),
            ("Garlic Bread", "bread, garlic butter", ItemType.SIDE.value, 4.25, "serves two"),
            ("Wings", "chicken wings, buffalo sauce", ItemType.SIDE.value, 7.75, "six pieces"),
            ("Cola", "carbonated water, sugar, caramel", ItemType.DRINK.value, 1.50, "330ml can"),
            ("Lemonade", "lemon, sugar, water", ItemType.DRINK.value, 2.25, "freshly squeezed"),
        ]
        self.conn.executemany(
            """--sql
            INSERT OR IGNORE INTO Items(itemName, ingredients, typeOfItem, price, description)
            VALUES(?, ?, ?, ?, ?);
            """,
            items
        )

    def _seed_default_manager(self):
        """create a default manager if missing"""
        self.conn.execute(
            """--sql
            INSERT OR IGNORE INTO Users(login, password, role) VALUES(?, ?, ?);
            """,
            (DEFAULT_MANAGER_LOGIN, DEFAULT_MANAGER_PASSWORD, Role.MANAGER.value)
        )

    def _run(self, sql: str, params: Sequence) -> sqlite3.Cursor:
        """execute one statement, translating engine errors"""
        logger.debug("sql: %s (%d params)", " ".join(sql.split()), len(params))
        try:
            return self.conn.execute(sql, tuple(params))
        except (sqlite3.Error, OverflowError) as e:
            logger.warning("statement failed: %s", e)
            raise StatementError(str(e)) from e

    def execute(self, sql: str, params: Sequence = ()):
        """run a mutating statement"""
        self._run(sql, params)

    def query_rows(self, sql: str, params: Sequence = ()) -> list[Row]:
        """run a query and return every row as a list of text values"""
        cur = self._run(sql, params)
        try:
            rows = cur.fetchall()
        except sqlite3.Error as e:
            raise StatementError(str(e)) from e
        return [[None if v is None else str(v) for v in row] for row in rows]

    def query_count(self, sql: str, params: Sequence = ()) -> int:
        """number of rows the query would return, without fetching them"""
        wrapped = f"SELECT COUNT(*) FROM ({sql.strip().rstrip(';')});"
        return int(self._run(wrapped, params).fetchone()[0])

    @contextmanager
    def transaction(self) -> Iterator["DatabaseManager"]:
        """all-or-nothing scope: commit on success, rollback on any error"""
        self._run("BEGIN;", ())
        try:
            yield self
            self._run("COMMIT;", ())
        except BaseException:
            logger.info("rolling back transaction")
            if self.conn.in_transaction:
                self.conn.execute("ROLLBACK;")
            raise

    def close(self):
        """close the connection"""
        if self.conn is not None:
            self.conn.close()
            self.conn = None
