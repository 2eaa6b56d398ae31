"""
Print the even numbers of a sequence while summing it, stopping at -999.
"""

import logging

from staticflow import configure, loop


def print_even_and_accumulate(state, x):
    if x == -999:
        return state.break_()
    if x % 2 == 0:
        print(f"Iteration ({state.iteration()}) - even number: {x}")
    return state.continue_(state.accumulator() + x)


def imperative(accumulator, *xs):
    for iteration, x in enumerate(xs):
        if x == -999:
            break
        if x % 2 == 0:
            print(f"Iteration ({iteration}) - even number: {x}")
        accumulator += x
    return accumulator


if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    configure(debug=True)

    combinator_result = loop(print_even_and_accumulate)(0)(5, 4, 15, 35)
    print(f"Combinator result: {combinator_result}")

    imperative_result = imperative(0, 5, 4, 15, 35)
    print(f"Imperative result: {imperative_result}")

    assert combinator_result == imperative_result == 59
    assert loop(print_even_and_accumulate)(0)(5, -999, 15) == 5
