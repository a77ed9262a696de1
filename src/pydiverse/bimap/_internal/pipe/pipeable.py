# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from functools import partial, reduce, wraps


class Pipeable:
    def __init__(self, f=None, calls=None):
        if f is not None:
            if calls is not None:
                raise ValueError
            self.calls = [f]
        else:
            self.calls = calls

    def __rshift__(self, other) -> Pipeable:
        """
        Pipeable >> other
        -> Lazy. Extend pipe.
        """
        if isinstance(other, Pipeable):
            return Pipeable(calls=self.calls + other.calls)
        elif callable(other):
            return Pipeable(calls=self.calls + [other])

        raise TypeError(
            f"cannot pipe into an object of type `{type(other).__name__}`\n"
            "hint: The right side of `>>` must be a verb or a callable."
        )

    def __rrshift__(self, other):
        """
        other >> Pipeable
        -> Eager.
        """
        return self(other)

    def __call__(self, arg):
        return reduce(lambda x, f: f(x), self.calls, arg)


class inverse_partial(partial):
    """
    Just like partial, but the arguments get applied to the back instead of the front.
    This means that a function `def x(a, b, c)` decorated with `@inverse_partial(1, 2)`
    that gets called with `x(0)` is equivalent to calling `x(0, 1, 2)` on the non
    decorated function.
    """

    def __call__(self, /, *args, **keywords):
        keywords = {**self.keywords, **keywords}
        return self.func(*args, *self.args, **keywords)


def verb(fn):
    """
    Decorator for creating verbs.

    A verb is a function that takes a container as its first argument. `@verb`
    enables usage of the function with the pipe `>>` syntax.

    Examples
    --------
    >>> @verb
    ... def rename_key(d, old, new):
    ...     return d.remove(old).insert(new, d[old]) if old in d else d
    >>> BiDict.singleton("a", 1) >> rename_key("a", "b")
    BiDict({'b': 1})
    """

    @wraps(fn)
    def wrapper(*args, **kwargs):
        return Pipeable(inverse_partial(fn, *args, **kwargs))

    return wrapper
