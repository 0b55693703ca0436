"""
Workers and Office Devices (Interface Segregation)

Each capability is its own small protocol. Concrete types implement only the
subset they support, and callers ask for capabilities instead of assuming one
fat interface.
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Workable(Protocol):
    def work(self) -> str: ...


@runtime_checkable
class Eatable(Protocol):
    def eat(self) -> str: ...


@runtime_checkable
class Sleepable(Protocol):
    def sleep(self) -> str: ...


@runtime_checkable
class Breakable(Protocol):
    def take_break(self) -> str: ...


@runtime_checkable
class Payable(Protocol):
    def get_paid(self) -> str: ...


@runtime_checkable
class Printer(Protocol):
    def print_document(self, document: str) -> str: ...


@runtime_checkable
class Scanner(Protocol):
    def scan(self, document: str) -> str: ...


@runtime_checkable
class Fax(Protocol):
    def fax(self, document: str) -> str: ...


@runtime_checkable
class Photocopier(Protocol):
    def photocopy(self, document: str) -> str: ...


CAPABILITIES: dict[str, type] = {
    "work": Workable,
    "eat": Eatable,
    "sleep": Sleepable,
    "break": Breakable,
    "pay": Payable,
    "print": Printer,
    "scan": Scanner,
    "fax": Fax,
    "photocopy": Photocopier,
}


def supports(obj: Any, capability: type) -> bool:
    return isinstance(obj, capability)


def capabilities_of(obj: Any) -> list[str]:
    return [name for name, protocol in CAPABILITIES.items() if isinstance(obj, protocol)]


@dataclass(frozen=True)
class HumanWorker:
    name: str

    def work(self) -> str:
        return f"{self.name} is working"

    def eat(self) -> str:
        return f"{self.name} is eating lunch"

    def sleep(self) -> str:
        return f"{self.name} is sleeping"

    def take_break(self) -> str:
        return f"{self.name} is taking a break"

    def get_paid(self) -> str:
        return f"{self.name} received salary"


@dataclass(frozen=True)
class RobotWorker:
    serial_number: str

    def work(self) -> str:
        return f"Robot {self.serial_number} is working"

    def take_break(self) -> str:
        return f"Robot {self.serial_number} is recharging batteries"


class SimplePrinter:
    def print_document(self, document: str) -> str:
        return f"Simple printer: Printing {document}"


class ScannerPrinter:
    def print_document(self, document: str) -> str:
        return f"Scanner-Printer: Printing {document}"

    def scan(self, document: str) -> str:
        return f"Scanner-Printer: Scanning {document}"


class AllInOnePrinter:
    def print_document(self, document: str) -> str:
        return f"All-in-one: Printing {document}"

    def scan(self, document: str) -> str:
        return f"All-in-one: Scanning {document}"

    def fax(self, document: str) -> str:
        return f"All-in-one: Faxing {document}"

    def photocopy(self, document: str) -> str:
        return f"All-in-one: Photocopying {document}"


def run_shift(workers: list[Any]) -> list[str]:
    """Each worker does what it can: work, then break, then eat if it eats."""
    lines = []
    for worker in workers:
        if supports(worker, Workable):
            lines.append(worker.work())
        if supports(worker, Breakable):
            lines.append(worker.take_break())
        if supports(worker, Eatable):
            lines.append(worker.eat())
    return lines
