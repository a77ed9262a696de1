# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause
import logging

import pytest

from pydiverse.bimap import BiDict, MultiBiDict, MultiDict
from pydiverse.common.util.structlog import setup_logging

# Setup


@pytest.fixture
def pets() -> BiDict:
    return BiDict.from_list([("Tom", "cat"), ("Jerry", "mouse"), ("Spike", "cat")])


@pytest.fixture
def tags() -> MultiDict:
    return MultiDict.from_flat_list(
        [("a", 1), ("b", 2), ("a", 3), ("c", 1), ("b", 4), ("a", 1)]
    )


@pytest.fixture
def chats() -> MultiBiDict:
    return (
        MultiBiDict.empty()
        .insert("chat1", "doc1")
        .insert("chat1", "doc2")
        .insert("chat2", "doc1")
    )


setup_logging(log_level=logging.INFO)
