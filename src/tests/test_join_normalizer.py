import pytest

import schemas
from core import constants
from models import Nomination, Nominator, UnclaimedEraInfo, Validator, ValidatorSlash
from services import join_normalizer


def test_bare_and_object_nominators_have_same_shape():
    bare = join_normalizer.normalize_nominator("addr-1")
    full = join_normalizer.normalize_nominator(
        {"address": "addr-1", "balance": {"lockedBalance": "0x01", "freeBalance": "0x02"}}
    )

    bare_ref = schemas.NominatorRef.model_validate(bare)
    full_ref = schemas.NominatorRef.model_validate(full)

    assert set(bare_ref.model_dump().keys()) == set(full_ref.model_dump().keys())
    assert bare_ref.address == full_ref.address
    assert bare_ref.balance is None
    assert full_ref.balance.locked_balance == 1


def test_nominator_record_is_normalized():
    record = Nominator(address="addr-2", balance={"lockedBalance": "0x03", "freeBalance": "0x04"})

    assert join_normalizer.normalize_nominator(record) == {
        "address": "addr-2",
        "balance": {"lockedBalance": "0x03", "freeBalance": "0x04"},
    }


def test_account_id_is_accepted_as_address():
    assert join_normalizer.nominator_address({"accountId": "addr-3"}) == "addr-3"


@pytest.mark.parametrize("entry", [None, 42, {"balance": {}}, {"address": ""}])
def test_unusable_nominator_entries_are_dropped(entry):
    assert join_normalizer.normalize_nominators(["addr-1", entry]) == [{"address": "addr-1"}]


def test_exposure_defaults_to_hex_zero():
    assert join_normalizer.normalize_exposure(None) == {
        "total": constants.HEX_ZERO,
        "own": constants.HEX_ZERO,
        "others": [],
    }
    exposure = join_normalizer.normalize_exposure(
        {"total": "0x10", "others": [{"who": "a"}, {"value": "0x01"}]}
    )
    assert exposure["own"] == constants.HEX_ZERO
    assert exposure["others"] == [{"who": "a", "value": constants.HEX_ZERO}]


def test_nomination_info_counts_normalized_nominators():
    nomination = Nomination(era=7, validator="v", nominators=["a", {"address": "b"}, 5])

    info = join_normalizer.build_nomination_info(nomination)

    assert info["nominatorCount"] == 2
    assert info["unclaimedEras"] == []
    assert info["total"] == constants.HEX_ZERO
    assert info["selfStake"] == constants.HEX_ZERO


def test_nomination_info_with_unclaimed_eras():
    nomination = Nomination(era=7, validator="v")
    unclaimed = UnclaimedEraInfo(validator="v", eras=[3, 4])

    info = join_normalizer.build_nomination_info(nomination, unclaimed=unclaimed)

    assert info["unclaimedEras"] == [3, 4]


def test_validator_nomination_info_without_metadata():
    nomination = Nomination(era=7, validator="v", commission=1.0, apy=0.1)

    info = join_normalizer.build_validator_nomination_info(nomination, None)

    assert info.identity.is_verified is False
    assert info.average_apy == 0
    assert info.blocked is False
    assert info.slashes == []
    assert info.info.unclaimed_eras == []


def test_validator_nomination_info_keeps_metadata():
    nomination = Nomination(era=7, validator="v")
    validator = Validator(
        id="v",
        identity={"display": "V", "isVerified": True},
        status_change={"commission": 3},
        average_apy=0.2,
        blocked=True,
    )
    slash = ValidatorSlash(address="v", era=5, total="0x0a", others=[])

    info = join_normalizer.build_validator_nomination_info(
        nomination, validator, slashes=[slash]
    )

    assert info.identity.display == "V"
    assert info.status_change.commission == 3
    assert info.blocked is True
    assert info.slashes[0].total == 10


def test_camel_case_output():
    nomination = Nomination(era=7, validator="v")

    dumped = join_normalizer.build_validator_nomination_info(nomination, None).model_dump(
        by_alias=True
    )

    assert "statusChange" in dumped
    assert "nominatorCount" in dumped["info"]
    assert "unclaimedEras" in dumped["info"]
