# SPDX-License-Identifier: MIT

import logging

from recordmoa.log_config import parse_level


def test_parse_level():
    assert parse_level("debug") == logging.DEBUG
    assert parse_level("nonsense") == logging.WARNING
