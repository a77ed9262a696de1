# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

# This module defines the config classes provided to the user to configure
# the data frame / python object a container is exported to.


class Target:
    def __init__(self, *, key: str = "key", value: str = "value") -> None:
        if key == value:
            raise ValueError(
                f"key and value column must have different names, got `{key}` twice"
            )
        self.key = key
        self.value = value

    def __repr__(self):
        return f"{type(self).__name__}(key={self.key!r}, value={self.value!r})"


class Polars(Target):
    def __init__(
        self, *, lazy: bool = False, key: str = "key", value: str = "value"
    ) -> None:
        super().__init__(key=key, value=value)
        self.lazy = lazy


class Pandas(Target): ...


class DictOfLists(Target): ...


class ListOfDicts(Target): ...
