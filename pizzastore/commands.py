"""numbered menus: bind choices to actions and contain their errors"""
import logging
from typing import Callable

from termcolor import cprint

from .errors import PizzaStoreError
from .helpers import print_options, read_choice

logger = logging.getLogger(__name__)


class Command:
    """bind a menu number to a function"""
    def __init__(self, choice: int, function: Callable[[], object], description: str):
        self.choice = choice
        self._fn = function
        self.description = description

    def execute(self):
        return self._fn()


class CommandMenu:
    """one level of the menu tree; loops until the exit choice or stop()"""
    def __init__(self, title: str, exit_choice: int, exit_label: str,
                 on_exit: Callable[[], object] | None = None):
        self.title = title
        self.exit_choice = exit_choice
        self.exit_label = exit_label
        self.on_exit = on_exit
        self.commands: list[Command] = []
        self.running = False

    def show(self):
        options = [(c.choice, c.description) for c in self.commands]
        options.append((self.exit_choice, self.exit_label))
        print()
        print_options(self.title, options)

    def dispatch(self, choice: int):
        """run the command for choice; any PizzaStoreError is printed, never raised"""
        if choice == self.exit_choice:
            self.stop()
            return
        cmd = next((c for c in self.commands if c.choice == choice), None)
        if cmd is None:
            cprint("unrecognized choice!", "red"); return
        try:
            return cmd.execute()
        except PizzaStoreError as e:
            logger.info("%s failed: %s", cmd.description, e)
            cprint(str(e), "red")

    def stop(self):
        self.running = False
        if self.on_exit is not None:
            self.on_exit()

    def run(self):
        """main loop for this menu level"""
        self.running = True
        while self.running:
            self.show()
            self.dispatch(read_choice())
