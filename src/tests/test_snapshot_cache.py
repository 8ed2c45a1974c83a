import json

from core import constants
from core.snapshot_cache import SnapshotCache

CHAIN = constants.CHAIN_POLKADOT


def test_get_missing_key(tmp_path):
    assert SnapshotCache(str(tmp_path)).get(CHAIN, "missing") is None


def test_get_reads_chain_prefixed_file(tmp_path):
    (tmp_path / f"{CHAIN}{constants.SNAPSHOT_ALL_VALIDATORS}").write_bytes(b"[1, 2]")

    assert SnapshotCache(str(tmp_path)).get(CHAIN, constants.SNAPSHOT_ALL_VALIDATORS) == b"[1, 2]"


def test_program_members(tmp_path):
    (tmp_path / f"{CHAIN}{constants.SNAPSHOT_ONE_KV}").write_text(
        json.dumps({"valid": [{"stash": "a"}, {"stash": "b"}, {"name": "no-stash"}]})
    )

    assert SnapshotCache(str(tmp_path)).get_program_members(CHAIN) == {"a", "b"}


def test_program_members_of_malformed_snapshot(tmp_path):
    (tmp_path / f"{CHAIN}{constants.SNAPSHOT_ONE_KV}").write_text("{not json")

    assert SnapshotCache(str(tmp_path)).get_program_members(CHAIN) == set()


def test_program_members_without_snapshot(tmp_path):
    assert SnapshotCache(str(tmp_path)).get_program_members(CHAIN) == set()
