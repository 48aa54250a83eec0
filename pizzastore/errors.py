"""error kinds raised by pizzastore operations

everything derives from PizzaStoreError so the menu loop can catch one type,
print the message and carry on. only DatabaseConnectionError is fatal.
"""


class PizzaStoreError(Exception):
    """base for every error a menu action can raise"""


class DatabaseConnectionError(PizzaStoreError):
    """could not open the database at startup"""


class StatementError(PizzaStoreError):
    """the database rejected a statement"""


class ValidationError(PizzaStoreError):
    """user input failed a format check"""


class AuthorizationError(PizzaStoreError):
    """actor's role does not allow the action"""


class NotFoundError(PizzaStoreError):
    """lookup returned no rows"""
