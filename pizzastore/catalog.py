"""catalog browsing: filtered/sorted item listings and open stores"""
from dataclasses import dataclass
from enum import Enum

from termcolor import cprint

from .database import DatabaseManager
from .helpers import FieldKind, color_money, print_fields, print_options, prompt_value, read_choice
from .models import Item, ItemType, Store

ITEM_COLUMNS = "itemName, ingredients, typeOfItem, price, description"


class SortOrder(Enum):
    """order by clause for item listings"""
    NONE = ""
    PRICE_ASC = "ORDER BY price ASC"
    PRICE_DESC = "ORDER BY price DESC"


@dataclass(frozen=True)
class ItemFilter:
    """one filter dimension at a time (or none)"""
    by_type: ItemType | None = None
    max_price: float | None = None

    def __post_init__(self):
        if self.by_type is not None and self.max_price is not None:
            raise ValueError("filter by type or by price, not both")

    def where(self) -> tuple[str, tuple]:
        """where clause and its parameters"""
        if self.by_type is not None:
            return "WHERE typeOfItem=?", (self.by_type.value,)
        if self.max_price is not None:
            return "WHERE price BETWEEN 0 AND ?", (float(self.max_price),)
        return "", ()


class CatalogBrowser:
    """read-only views over Items and Store"""
    def __init__(self, db: DatabaseManager):
        self.db = db

    def list_items(self, item_filter: ItemFilter = ItemFilter(), order: SortOrder = SortOrder.NONE) -> list[Item]:
        """items matching the filter, in the requested order"""
        where, params = item_filter.where()
        sql = " ".join(part for part in (f"SELECT {ITEM_COLUMNS} FROM Items", where, order.value) if part)
        return [Item.from_row(r) for r in self.db.query_rows(sql + ";", params)]

    def get_item(self, name: str) -> Item | None:
        """lookup a single item by exact name"""
        rows = self.db.query_rows(f"SELECT {ITEM_COLUMNS} FROM Items WHERE itemName=?;", (name,))
        return Item.from_row(rows[0]) if rows else None

    def list_open_stores(self) -> list[Store]:
        """stores currently taking orders"""
        rows = self.db.query_rows(
            """--sql
            SELECT storeID, address, city, state, isOpen, reviewScore
            FROM Store WHERE isOpen='yes' ORDER BY storeID;
            """
        )
        return [Store.from_row(r) for r in rows]

    @staticmethod
    def print_item(item: Item):
        """print one item card"""
        print_fields([
            ("name", item.name),
            ("ingredients", item.ingredients),
            ("type", item.type),
            ("price", color_money(item.price)),
            ("description", item.description),
        ])
        print()

    def view_stores(self):
        """print open stores"""
        stores = self.list_open_stores()
        if not stores:
            cprint("no stores are open right now", "red"); return
        cprint("these are the open stores that you can place an order at:", "green")
        for s in stores:
            score = "n/a" if s.review_score is None else f"{s.review_score:.1f}"
            print(f"store #{s.id}: {s.address}, {s.city}, {s.state} (review score {score})")

    @staticmethod
    def _choose_filter() -> ItemFilter | None:
        """one-shot filter selection; none means go back"""
        print_options("view menu", [(1, "search by type"), (2, "search by price"), (3, "search all items")])
        choice = read_choice()
        if choice == 1:
            print_options("item type", [(1, "entree"), (2, "sides"), (3, "drinks")])
            item_type = {1: ItemType.ENTREE, 2: ItemType.SIDE}.get(read_choice(), ItemType.DRINK)
            return ItemFilter(by_type=item_type)
        if choice == 2:
            cost = prompt_value("the maximum cost (price under...)", FieldKind.NUMERIC)
            return ItemFilter(max_price=float(cost))
        if choice == 3:
            return ItemFilter()
        return None

    def browse(self):
        """pick a filter once, then re-sort the same listing until exit"""
        item_filter = self._choose_filter()
        if item_filter is None:
            return
        order = SortOrder.NONE
        while True:
            items = self.list_items(item_filter, order)
            if not items:
                cprint("no items match", "yellow")
            for item in items:
                self.print_item(item)
            print_options("sort", [
                (1, "view by highest to lowest"),
                (2, "view by lowest to highest"),
                (3, "view unsorted"),
                (4, "exit"),
            ])
            choice = read_choice()
            if choice > 3:
                return
            order = {1: SortOrder.PRICE_DESC, 2: SortOrder.PRICE_ASC}.get(choice, SortOrder.NONE)
