"""
Tests for sui_toolbox.models

Tests cover:
- BuildArtifact parsing from build output
- TransactionEffectsResult parsing from JSON-RPC responses
- PublishResult serialization
"""

import pytest

from sui_toolbox.models import BuildArtifact, ObjectChange, PublishResult, TransactionEffectsResult

from helpers import make_tx_response


class TestBuildArtifact:

    def test_from_build_output(self):
        artifact = BuildArtifact.from_build_output({"modules": ["a", "b"], "dependencies": ["0x1"]})

        assert artifact.modules == ("a", "b")
        assert artifact.dependencies == ("0x1",)

    def test_missing_dependencies_defaults_to_empty(self):
        assert BuildArtifact.from_build_output({"modules": ["a"]}).dependencies == ()

    @pytest.mark.parametrize("data", [
        [],
        {},
        {"modules": [1, 2]},
        {"modules": ["a"], "dependencies": "0x1"},
    ])
    def test_rejects_bad_shapes(self, data):
        with pytest.raises(ValueError):
            BuildArtifact.from_build_output(data)

    def test_is_immutable(self):
        artifact = BuildArtifact(modules=("a",))

        with pytest.raises(AttributeError):
            artifact.modules = ()


class TestTransactionEffectsResult:

    def test_from_response(self):
        effects = TransactionEffectsResult.from_response(make_tx_response(digest="D9"))

        assert effects.digest == "D9"
        assert effects.status == "success"
        assert effects.succeeded
        assert [c.type for c in effects.object_changes] == ["created", "published"]

    def test_failure_status_and_error(self):
        effects = TransactionEffectsResult.from_response(
            make_tx_response(status="failure", error="MoveAbort", package_id=None)
        )

        assert not effects.succeeded
        assert effects.error == "MoveAbort"

    def test_missing_effects_is_unknown(self):
        effects = TransactionEffectsResult.from_response({"digest": "D"})

        assert effects.status == "unknown"
        assert not effects.succeeded
        assert effects.object_changes == ()

    def test_changes_of_type(self):
        effects = TransactionEffectsResult.from_response(make_tx_response())

        published = effects.changes_of_type("published")
        assert len(published) == 1
        assert published[0].modules == ("token",)


class TestObjectChange:

    def test_from_dict_created(self):
        change = ObjectChange.from_dict({
            "type": "created", "objectId": "0x77", "objectType": "0x2::package::UpgradeCap", "version": 3,
        })

        assert change.object_id == "0x77"
        assert change.version == "3"
        assert change.package_id is None


class TestPublishResult:

    def test_to_dict(self):
        response = make_tx_response()
        result = PublishResult(package_id="0x42", publish_txn=TransactionEffectsResult.from_response(response))

        assert result.to_dict() == {"packageId": "0x42", "publishTxn": response}
