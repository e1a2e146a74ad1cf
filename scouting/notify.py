from abc import ABC, abstractmethod

import click


class Notifier(ABC):
    """Blocking alert/confirmation surface used by the entry points."""

    @abstractmethod
    def alert(self, message: str) -> None:
        pass

    @abstractmethod
    def confirm(self, title: str, message: str) -> bool:
        pass


class ConsoleNotifier(Notifier):
    def __init__(self, assume_yes: bool = False):
        self.assume_yes = assume_yes

    def alert(self, message: str) -> None:
        click.echo()
        click.echo(message)
        click.echo()

    def confirm(self, title: str, message: str) -> bool:
        click.secho(title, bold=True)
        if self.assume_yes:
            click.echo(message)
            return True
        return click.confirm(message, default=False)
