"""pizzastore: menu-driven terminal front-end for a pizza store database"""

__version__ = "1.0.0"
