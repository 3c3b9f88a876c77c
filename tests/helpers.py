"""
Test helpers for sui_toolbox tests.

- FakeClock: injected clock/sleep pair for retry tests
- FakeBuilder: PackageBuilder with canned output
- make_tx_response: sui_getTransactionBlock result payloads
"""


class FakeClock:
    """Monotonic clock whose sleep() only advances time."""

    def __init__(self, start: float = 1000.0):
        self.now = start
        self.sleeps = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float):
        self.sleeps.append(seconds)
        self.now += seconds

    def advance(self, seconds: float):
        self.now += seconds


class FakeBuilder:
    """PackageBuilder returning canned output instead of running sui."""

    def __init__(self, output=None, error=None):
        self.output = output if output is not None else {"modules": ["AQID"], "dependencies": []}
        self.error = error
        self.calls = []

    def run_build(self, path):
        self.calls.append(str(path))
        if self.error is not None:
            raise self.error
        return self.output


def make_tx_response(
    digest="9XYZdigest",
    status="success",
    error=None,
    package_id="0x0000000000000000000000000000000000000000000000000000000000000042",
    extra_changes=(),
):
    """sui_getTransactionBlock result with one published change (unless package_id is None)."""
    changes = [
        {
            "type": "created",
            "sender": "0xabc",
            "owner": {"AddressOwner": "0xabc"},
            "objectType": "0x2::package::UpgradeCap",
            "objectId": "0x77",
            "version": "3",
            "digest": "capdigest",
        },
        *extra_changes,
    ]
    if package_id is not None:
        changes.append({
            "type": "published",
            "packageId": package_id,
            "version": "1",
            "digest": "pkgdigest",
            "modules": ["token"],
        })

    status_info = {"status": status}
    if error:
        status_info["error"] = error

    return {
        "digest": digest,
        "effects": {"status": status_info, "transactionDigest": digest},
        "objectChanges": changes,
    }
