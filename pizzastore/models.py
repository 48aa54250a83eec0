"""domain models; rows come back from the gateway as text and are parsed here"""
from dataclasses import dataclass, field
from enum import Enum


class Role(Enum):
    """user authorization class"""
    CUSTOMER = "customer"
    DRIVER = "driver"
    MANAGER = "manager"

    @classmethod
    def values(cls) -> list[str]:
        return [r.value for r in cls]


class ItemType(Enum):
    """menu item category"""
    ENTREE = "entree"
    SIDE = "side"
    DRINK = "drink"

    @classmethod
    def values(cls) -> list[str]:
        return [t.value for t in cls]


class OrderStatus(Enum):
    """order lifecycle, in order"""
    INCOMPLETE = "incomplete"
    IN_PROGRESS = "in-progress"
    COMPLETE = "complete"

    @classmethod
    def values(cls) -> list[str]:
        return [s.value for s in cls]

    @property
    def rank(self) -> int:
        return list(OrderStatus).index(self)


@dataclass
class Item:
    """menu item"""
    name: str
    ingredients: str
    type: str
    price: float
    description: str | None

    @classmethod
    def from_row(cls, row: list[str]) -> "Item":
        name, ingredients, item_type, price, description = row
        return cls(name, ingredients, item_type, float(price), description)


@dataclass
class Store:
    """store location"""
    id: int
    address: str
    city: str
    state: str
    is_open: bool
    review_score: float | None

    @classmethod
    def from_row(cls, row: list[str]) -> "Store":
        sid, address, city, state, is_open, score = row
        return cls(int(sid), address, city, state, is_open == "yes",
                   None if score is None else float(score))


@dataclass
class Order:
    """order header row"""
    id: int
    login: str
    store_id: int
    total_price: float
    timestamp: str
    status: str

    @classmethod
    def from_row(cls, row: list[str]) -> "Order":
        oid, login, store_id, total, timestamp, status = row
        return cls(int(oid), login, int(store_id), float(total), timestamp, status)


@dataclass
class OrderLine:
    """one item + quantity within an order"""
    order_id: int
    item_name: str
    quantity: int


@dataclass
class Profile:
    """user row as shown on the profile screen"""
    login: str
    password: str
    role: str
    favorite_item: str | None
    phone: str | None

    @classmethod
    def from_row(cls, row: list[str]) -> "Profile":
        return cls(*row)


@dataclass
class Cart:
    """item name -> quantity, built up before checkout"""
    lines: dict[str, int] = field(default_factory=dict)

    def add(self, item_name: str, quantity: int):
        """add quantity of item; repeated items merge into one line"""
        if quantity < 1:
            raise ValueError("quantity must be positive")
        self.lines[item_name] = self.lines.get(item_name, 0) + quantity

    def __iter__(self):
        return iter(self.lines.items())

    def __len__(self):
        return len(self.lines)
