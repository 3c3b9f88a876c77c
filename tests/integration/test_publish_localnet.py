"""
Integration test against a running localnet.

Needs `sui start --with-faucet --force-regenesis` and the sui binary on
PATH (or SUI_BIN). Skipped unless SUI_TOOLBOX_INTEGRATION=1 and
SUI_TEST_PACKAGE points at a Move package directory.
"""

import os
import re

import pytest

from sui_toolbox import publish_package, setup_sui_client

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        os.getenv("SUI_TOOLBOX_INTEGRATION") != "1" or not os.getenv("SUI_TEST_PACKAGE"),
        reason="set SUI_TOOLBOX_INTEGRATION=1 and SUI_TEST_PACKAGE to run against localnet",
    ),
]


def test_publish_twice_gives_two_packages():
    package_path = os.environ["SUI_TEST_PACKAGE"]

    first = publish_package(package_path, setup_sui_client())
    second = publish_package(package_path, setup_sui_client())

    assert re.fullmatch(r"0x[1-9a-f][0-9a-f]*", first.package_id)
    assert first.publish_txn.succeeded
    assert first.package_id != second.package_id


def test_active_validators():
    toolbox = setup_sui_client()
    try:
        assert len(toolbox.get_active_validators()) > 0
    finally:
        toolbox.close()
