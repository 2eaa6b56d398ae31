"""
Anonymous recursion with the self-reference adapters.
"""

from staticflow import branch, trampolined, y_combinator

factorial = y_combinator(
    lambda self, n: branch(n == 0).then(lambda: 1).else_(lambda: n * self(n - 1))()
)

# The trampoline variant must recurse in tail position.
sum_to = trampolined(
    lambda self, n, acc=0: acc if n == 0 else self(n - 1, acc=acc + n)
)


if __name__ == "__main__":
    print(factorial(10))
    print(sum_to(200_000))
