"""
Branch chains that only touch the capability their predicate guarantees.

Solids are eaten, liquids are drunk, everything else is rejected. ``eat`` is
never called on a liquid and ``drink`` never on a solid.
"""

from staticflow import branch


class Banana:
    def eat(self):
        return "eating banana"


class Juice:
    def drink(self):
        return "drinking juice"


def consume(x):
    return (
        branch(hasattr(x, "eat"))
        .then(lambda y: y.eat())
        .else_if(hasattr(x, "drink"))
        .then(lambda y: y.drink())
        .else_(lambda y: f"cannot consume {type(y).__name__}")
    )(x)


if __name__ == "__main__":
    for item in (Banana(), Juice(), 42, 1.5):
        print(consume(item))
