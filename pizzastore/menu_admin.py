"""manager-only catalog maintenance"""
import logging

from termcolor import cprint

from .accounts import AccountManager, Session
from .catalog import CatalogBrowser
from .database import DatabaseManager
from .errors import NotFoundError, ValidationError
from .helpers import FieldKind, print_options, prompt_value, read_choice, validate
from .models import Item, ItemType, Role

logger = logging.getLogger(__name__)

# menu choice -> (column, prompt label, kind, allowed values)
ITEM_ATTRIBUTES = {
    1: ("ingredients", "ingredients", FieldKind.NOT_NULL, None),
    2: ("typeOfItem", "type", FieldKind.NOT_NULL, ItemType.values()),
    3: ("price", "price", FieldKind.NUMERIC, None),
    4: ("description", "description", FieldKind.NOT_NULL, None),
}
QUIT = "q"


class MenuAdmin:
    """add / update / remove items; every action requires a manager"""
    def __init__(self, db: DatabaseManager, account_manager: AccountManager, catalog: CatalogBrowser):
        self.db = db
        self.account_manager = account_manager
        self.catalog = catalog

    def _require_manager(self, session: Session):
        self.account_manager.require_role(session, (Role.MANAGER,), "update the menu")

    def add_item(self, session: Session, name: str | None = None, ingredients: str | None = None,
                 item_type: str | None = None, price: str | None = None, description: str | None = None) -> Item:
        """insert a new item; prompts for anything not given"""
        self._require_manager(session)
        if name is None:
            name = prompt_value("item name", FieldKind.NOT_NULL)
        if ingredients is None:
            ingredients = prompt_value("ingredients", FieldKind.NOT_NULL)
        if item_type is None:
            item_type = prompt_value(f"item type ({'/'.join(ItemType.values())})", FieldKind.NOT_NULL, ItemType.values())
        if price is None:
            price = prompt_value("price", FieldKind.NUMERIC)
        if description is None:
            description = prompt_value("description", FieldKind.NOT_NULL)
        item = Item(
            validate(name, FieldKind.NOT_NULL),
            validate(ingredients, FieldKind.NOT_NULL),
            validate(item_type, FieldKind.NOT_NULL, ItemType.values()),
            float(validate(str(price), FieldKind.NUMERIC)),
            validate(description, FieldKind.NOT_NULL),
        )
        self.db.execute(
            "INSERT INTO Items(itemName, ingredients, typeOfItem, price, description) VALUES(?, ?, ?, ?, ?);",
            (item.name, item.ingredients, item.type, item.price, item.description)
        )
        logger.info("item %r added by %s", item.name, session.login)
        cprint("menu item added", "green")
        return item

    def remove_item(self, session: Session, name: str | None = None):
        """delete by name, whether or not orders still reference it"""
        self._require_manager(session)
        if name is None:
            name = prompt_value("item name", FieldKind.NOT_NULL)
        self.db.execute("DELETE FROM Items WHERE itemName=?;", (name,))
        logger.info("item %r removed by %s", name, session.login)
        cprint("deleted", "green")

    def set_item_attribute(self, session: Session, name: str, attribute: int, value: str) -> Item:
        """overwrite one attribute (menu choice 1-4) and return the item as stored"""
        self._require_manager(session)
        if attribute not in ITEM_ATTRIBUTES:
            raise ValidationError(f"no such attribute choice {attribute}")
        column, _, kind, allowed = ITEM_ATTRIBUTES[attribute]
        value = validate(value, kind, allowed)
        self.db.execute(
            f"UPDATE Items SET {column}=? WHERE itemName=?;",
            (float(value) if kind is FieldKind.NUMERIC else value, name)
        )
        item = self.catalog.get_item(name)
        if item is None:
            raise NotFoundError(f"item {name!r} doesn't exist")
        logger.info("item %r: %s updated by %s", name, column, session.login)
        return item

    def _prompt_existing_item(self) -> str | None:
        while True:
            name = prompt_value(f"item name ('{QUIT}' to quit)", FieldKind.NOT_NULL)
            if name == QUIT:
                return None
            if self.db.query_count("SELECT 1 FROM Items WHERE itemName=?", (name,)) > 0:
                return name
            cprint("item name doesn't exist.", "red")

    def update_item(self, session: Session, name: str | None = None):
        """edit loop: show the stored item, pick an attribute, overwrite, repeat"""
        self._require_manager(session)
        if name is None:
            name = self._prompt_existing_item()
            if name is None:
                return
        while True:
            item = self.catalog.get_item(name)
            if item is None:
                raise NotFoundError(f"item {name!r} doesn't exist")
            self.catalog.print_item(item)
            print_options("edit item", [
                (1, "edit ingredients"),
                (2, "edit type"),
                (3, "edit price"),
                (4, "edit description"),
                (5, "exit"),
            ])
            choice = read_choice()
            if choice not in ITEM_ATTRIBUTES:
                return
            _, label, kind, allowed = ITEM_ATTRIBUTES[choice]
            hint = f" ({'/'.join(allowed)})" if allowed else ""
            value = prompt_value(f"new {label}{hint}", kind, allowed)
            self.set_item_attribute(session, name, choice, value)

    def update_menu(self, session: Session):
        """manager menu: update / remove / add"""
        self._require_manager(session)
        print_options("update menu", [
            (1, "update item"),
            (2, "remove item"),
            (3, "add item"),
            (4, "return home"),
        ])
        choice = read_choice()
        if choice == 1:
            self.update_item(session)
        elif choice == 2:
            self.remove_item(session)
        elif choice == 3:
            self.add_item(session)
        elif choice != 4:
            cprint("unrecognized choice!", "red")
