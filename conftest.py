#
# Copyright (c) 2023 LateGenXer
#
# SPDX-License-Identifier: AGPL-3.0-or-later
#


import logging
import os.path
import sys
import pytest


here = os.path.dirname(__file__)
sys.path.insert(0, here)


pytest.register_assert_rewrite("tax")


def pytest_addoption(parser):
    parser.addoption("--debug-bands", action="store_true", default=False, help="Log band arithmetic")


@pytest.fixture(autouse=True)
def debug_bands(request, caplog):
    if request.config.getoption("--debug-bands"):
        caplog.set_level(logging.DEBUG, logger="tax")
