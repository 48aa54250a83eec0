"""order placement, history, detail and status updates"""
import logging
from dataclasses import dataclass

from termcolor import cprint, colored

from .accounts import AccountManager, Session
from .catalog import CatalogBrowser
from .config import RECENT_ORDER_LIMIT
from .database import DatabaseManager
from .errors import AuthorizationError, NotFoundError, ValidationError
from .helpers import color_money, parse_boolean_input, prompt_int, prompt_value, FieldKind
from .models import Cart, Order, OrderLine, OrderStatus, Role

logger = logging.getLogger(__name__)

ORDER_COLUMNS = "orderID, login, storeID, totalPrice, orderTimestamp, orderStatus"
STAFF_ROLES = (Role.MANAGER, Role.DRIVER)


@dataclass
class Receipt:
    """what checkout reports back"""
    order_id: int
    total: float
    lines: list[OrderLine]


class OrderManager:
    """checkout flow plus the order views"""
    def __init__(self, db: DatabaseManager, account_manager: AccountManager, catalog: CatalogBrowser):
        self.db = db
        self.account_manager = account_manager
        self.catalog = catalog

    # pricing
    def price_of(self, item_name: str) -> float | None:
        """current unit price, none if the item does not exist"""
        rows = self.db.query_rows("SELECT price FROM Items WHERE itemName=?;", (item_name,))
        return float(rows[0][0]) if rows else None

    def compute_total(self, cart: Cart) -> tuple[float, list[tuple[str, int]]]:
        """sum price * quantity, one price lookup per line; unknown items are skipped"""
        total = 0.0
        priced = []
        for name, quantity in cart:
            price = self.price_of(name)
            if price is None:
                logger.info("skipping unknown item %r", name)
                continue
            total += price * quantity
            priced.append((name, quantity))
        return round(total, 2), priced

    # checkout steps
    def _select_store(self) -> int:
        """show open stores and read an id (not checked against the list)"""
        self.catalog.view_stores()
        return prompt_int("the store id of the store you would like to order from", minimum=1)

    def _build_cart(self) -> Cart:
        """prompt item/quantity pairs until the user stops"""
        cprint("menu:", "green", attrs=["bold"])
        for item in self.catalog.list_items():
            print(f"{item.name}: {color_money(item.price)} - {item.description or ''}")
        cart = Cart()
        while True:
            name = prompt_value("the item that you want to add to your order", FieldKind.NOT_NULL)
            quantity = prompt_int("the quantity that you want of this item", minimum=1)
            cart.add(name, quantity)
            ans = input("do you want to order more items? (y/N): ")
            if not parse_boolean_input(ans):
                return cart

    def place_order(self, session: Session, store_id: int | None = None, cart: Cart | None = None) -> Receipt:
        """select store, build cart, price it and persist order + lines atomically"""
        if store_id is None:
            store_id = self._select_store()
        if cart is None:
            cart = self._build_cart()
        total, priced = self.compute_total(cart)
        if not priced:
            raise ValidationError("none of the cart items are on the menu; an order needs at least one menu item, nothing ordered")
        with self.db.transaction():
            rows = self.db.query_rows(
                """--sql
                INSERT INTO FoodOrder(login, storeID, totalPrice, orderTimestamp, orderStatus)
                VALUES(?, ?, ?, CURRENT_TIMESTAMP, ?)
                RETURNING orderID;
                """,
                (session.login, store_id, total, OrderStatus.INCOMPLETE.value)
            )
            order_id = int(rows[0][0])
            lines = []
            for name, quantity in priced:
                self.db.execute(
                    "INSERT INTO ItemsInOrder(orderID, itemName, quantity) VALUES(?, ?, ?);",
                    (order_id, name, quantity)
                )
                lines.append(OrderLine(order_id, name, quantity))
        logger.info("order #%d placed by %s, total %.2f", order_id, session.login, total)
        cprint(f"your order has been placed successfully! order id: {order_id}, total price: {color_money(total)}", "green")
        return Receipt(order_id, total, lines)

    # history
    def order_history(self, session: Session, limit: int | None = None) -> list[Order]:
        """session user's orders, newest first"""
        sql = f"SELECT {ORDER_COLUMNS} FROM FoodOrder WHERE login=? ORDER BY orderTimestamp DESC, orderID DESC"
        params: tuple = (session.login,)
        if limit is not None:
            sql += " LIMIT ?"
            params += (limit,)
        return [Order.from_row(r) for r in self.db.query_rows(sql + ";", params)]

    @staticmethod
    def print_order_summary(order: Order):
        print(f"order #{order.id}: store #{order.store_id}, total {color_money(order.total_price)}, "
              f"placed {order.timestamp}, status {colored(order.status, 'cyan')}")

    def view_order_history(self, session: Session):
        """print every order the user has made"""
        orders = self.order_history(session)
        if not orders:
            cprint("you have no order history.", "yellow"); return
        cprint("these are all of the orders you have ever made:", "green")
        for o in orders:
            self.print_order_summary(o)

    def view_recent_orders(self, session: Session):
        """print the last few orders"""
        orders = self.order_history(session, RECENT_ORDER_LIMIT)
        if not orders:
            cprint("you have no order history.", "yellow"); return
        cprint(f"your {RECENT_ORDER_LIMIT} most recent orders:", "green")
        for o in orders:
            self.print_order_summary(o)

    # detail
    def _fetch_order(self, order_id: int) -> Order | None:
        rows = self.db.query_rows(f"SELECT {ORDER_COLUMNS} FROM FoodOrder WHERE orderID=?;", (order_id,))
        return Order.from_row(rows[0]) if rows else None

    def order_lines(self, order_id: int) -> list[OrderLine]:
        rows = self.db.query_rows(
            "SELECT itemName, quantity FROM ItemsInOrder WHERE orderID=? ORDER BY itemName;",
            (order_id,)
        )
        return [OrderLine(order_id, name, int(qty)) for name, qty in rows]

    def order_details(self, session: Session, order_id: int) -> tuple[Order, list[OrderLine]]:
        """order + lines; staff see any order, customers only their own"""
        order = self._fetch_order(order_id)
        staff = self.account_manager.authorize(session.login, STAFF_ROLES)
        if order is None or (not staff and order.login != session.login):
            raise NotFoundError("no order found with the given id or you do not have permission to view it")
        return order, self.order_lines(order_id)

    def view_order_info(self, session: Session, order_id: int | None = None):
        """print one order with its items"""
        if order_id is None:
            order_id = prompt_int("the order id of the order you want to view", minimum=1)
        order, lines = self.order_details(session, order_id)
        cprint(f"order #{order.id}", "green", attrs=["bold"])
        print(f"placed by:\t{order.login}")
        print(f"store:\t\t#{order.store_id}")
        print(f"timestamp:\t{order.timestamp}")
        print(f"total price:\t{color_money(order.total_price)}")
        print(f"status:\t\t{order.status}")
        print("items in this order:")
        for line in lines:
            print(f"- {line.item_name} (quantity: {line.quantity})")

    # status
    def update_order_status(self, session: Session, order_id: int | None = None, status: str | None = None) -> Order:
        """drivers move orders forward; managers set any status"""
        self.account_manager.require_role(session, STAFF_ROLES, "update order status")
        if order_id is None:
            order_id = prompt_int("the order id to update", minimum=1)
        order = self._fetch_order(order_id)
        if order is None:
            raise NotFoundError(f"order #{order_id} not found")
        if status is None:
            cprint(f"order #{order.id} is currently {order.status}", "yellow")
            status = prompt_value(f"new status ({'/'.join(OrderStatus.values())})",
                                  FieldKind.NOT_NULL, OrderStatus.values())
        try:
            new_status = OrderStatus(status)
        except ValueError:
            raise ValidationError(f"unknown status {status!r}") from None
        if not self.account_manager.authorize(session.login, (Role.MANAGER,)):
            current_rank = OrderStatus(order.status).rank if order.status in OrderStatus.values() else -1
            if new_status.rank < current_rank:
                raise AuthorizationError("drivers can only move an order forward")
        self.db.execute("UPDATE FoodOrder SET orderStatus=? WHERE orderID=?;", (new_status.value, order_id))
        logger.info("order #%d status %s -> %s by %s", order_id, order.status, new_status.value, session.login)
        cprint(f"order #{order_id} is now {new_status.value}", "green")
        order.status = new_status.value
        return order
