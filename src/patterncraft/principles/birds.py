"""
Birds and Shapes (Liskov Substitution)

Variants only promise behavior they can honor. Movement is a per-variant
capability; eating and sleeping are shared free functions.
"""

from dataclasses import dataclass
from typing import Protocol, Union

from ..errors import InvalidArgumentError


@dataclass(frozen=True)
class FlyingBird:
    name: str

    def fly(self) -> str:
        return f"{self.name} is flying"

    def move(self) -> str:
        return self.fly()


@dataclass(frozen=True)
class SwimmingBird:
    name: str

    def swim(self) -> str:
        return f"{self.name} is swimming"

    def move(self) -> str:
        return self.swim()


Bird = Union[FlyingBird, SwimmingBird]


def eat(bird: Bird) -> str:
    return f"{bird.name} is eating"


def sleep(bird: Bird) -> str:
    return f"{bird.name} is sleeping"


def sparrow() -> FlyingBird:
    return FlyingBird("Sparrow")


def eagle() -> FlyingBird:
    return FlyingBird("Eagle")


def penguin() -> SwimmingBird:
    return SwimmingBird("Penguin")


class Shape(Protocol):
    def area(self) -> int:
        ...


def _positive(argument: str, value: int) -> int:
    if value <= 0:
        raise InvalidArgumentError(argument, value, expected="a positive length")
    return value


@dataclass(frozen=True)
class Rectangle:
    width: int
    height: int

    def __post_init__(self) -> None:
        _positive("width", self.width)
        _positive("height", self.height)

    def area(self) -> int:
        return self.width * self.height


@dataclass(frozen=True)
class Square:
    side_length: int

    def __post_init__(self) -> None:
        _positive("side_length", self.side_length)

    def area(self) -> int:
        return self.side_length * self.side_length


def total_area(shapes: list[Shape]) -> int:
    return sum(shape.area() for shape in shapes)
