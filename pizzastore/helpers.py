"""terminal helpers: prompts, validation and coloured output"""
import re
from enum import Enum
from typing import Iterable

from termcolor import cprint, colored

from .config import PRICE_PATTERN, SQLITE_MAX_INT
from .errors import ValidationError


class FieldKind(Enum):
    """how a prompted value is checked"""
    ANY = "any"
    NOT_NULL = "not null"
    NUMERIC = "numeric"


def safe_int(value: str, minimum: int | None = None):
    """return int value or none if invalid / below minimum"""
    try:
        v = int(value)
        if minimum is not None and v < minimum:
            return None
        return v
    except ValueError:
        return None

def color_money(amount: float | str) -> str:
    """format amount as green money string"""
    return colored(f"${float(amount):.2f}", "green")

def parse_boolean_input(prompt: str) -> bool:
    """parse y/n style input; anything else counts as no"""
    return prompt.lower().strip() in ("y", "yes")

def validate(text: str, kind: FieldKind = FieldKind.ANY, allowed: Iterable[str] | None = None) -> str:
    """return text if it passes the check for kind, else raise ValidationError"""
    if kind is FieldKind.NUMERIC and not re.match(PRICE_PATTERN, text):
        raise ValidationError("invalid input, expected a number with up to 2 decimals")
    if kind is FieldKind.NOT_NULL and not text:
        raise ValidationError("invalid input, value cannot be empty")
    if allowed is not None:
        options = list(allowed)
        if text not in options:
            raise ValidationError(f"invalid input, expected one of: {', '.join(options)}")
    return text

def prompt_value(title: str, kind: FieldKind = FieldKind.ANY, allowed: Iterable[str] | None = None) -> str:
    """prompt until the answer validates"""
    if allowed is not None:
        allowed = list(allowed)
    while True:
        text = input(colored(f"enter {title}: ", "magenta")).strip()
        try:
            return validate(text, kind, allowed)
        except ValidationError as e:
            cprint(str(e), "red")

def prompt_int(title: str, minimum: int | None = None) -> int:
    """prompt until an integer (>= minimum) that fits a sqlite integer is given"""
    while True:
        value = safe_int(input(colored(f"enter {title}: ", "magenta")).strip(), minimum)
        try:
            if value is None:
                raise ValidationError("your input is invalid!")
            if value > SQLITE_MAX_INT:
                raise ValidationError(f"your input is invalid! numbers must be at most {SQLITE_MAX_INT}")
            return value
        except ValidationError as e:
            cprint(str(e), "red")

def read_choice() -> int:
    """numeric menu choice; re-prompts forever on junk"""
    while True:
        value = safe_int(input(colored("please make your choice: ", "blue")).strip())
        if value is not None:
            return value
        cprint("your input is invalid!", "red")

def print_options(title: str, options: Iterable[tuple[int, str]]):
    """print a numbered menu"""
    cprint(title, "green", attrs=["bold"])
    cprint("-" * len(title), "green")
    for number, label in options:
        print(f"{colored(str(number), 'blue')}. {label}")

def print_fields(fields: Iterable[tuple[str, object]]):
    """print label/value pairs lined up"""
    for label, value in fields:
        print(f"{label + ':':<16}{'' if value is None else value}")
