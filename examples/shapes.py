"""
Example showing classes, virtual methods, attribute sharing and casting.
"""

from __future__ import annotations

import logging

from smartclass import method, newclass

Shape = newclass("Shape")


@method(Shape)
def init(self, label: str):
    self.label = label


Shape.virtual("area")


@method(Shape)
def describe(self):
    return f"{self.label}: {self.area():.2f}"


Rectangle = Shape.subclass("Rectangle")


@method(Rectangle)
def init(self, width: float, height: float):  # noqa: F811
    self.width = width
    self.height = height
    self.super.init("rectangle")


@method(Rectangle)
def area(self):
    rect = Rectangle.cast(self)
    return rect.width * rect.height


Square = Rectangle.subclass("Square")


@method(Square)
def init(self, side: float):  # noqa: F811
    self.super.init(side, side)
    self.label = "square"


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    shapes = [Rectangle(2, 3), Square.new(4)]
    for shape in shapes:
        print(shape, "->", shape.describe())
    print("square is a Shape:", Shape.made(shapes[1]))
    print("rectangle is a Square:", Square.made(shapes[0]))
