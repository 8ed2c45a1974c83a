"""Default-fill and shape repair for joined records.

Every composite entity returned by the validator service is assembled here, so
that a join miss always resolves to the same default no matter which query
produced the row.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

import schemas
from core import constants
from models import Nomination, Nominator, UnclaimedEraInfo, Validator, ValidatorSlash

logger = logging.getLogger(__name__)

DEFAULT_IDENTITY = {
    "display": "",
    "parent": "",
    "sub": "",
    "isVerified": False,
}


def normalize_nominator(entry: Any) -> Optional[Dict[str, Any]]:
    """Coerce a bare address or a nominator object into `{address, balance?}`."""
    if isinstance(entry, str):
        return {"address": entry}

    if isinstance(entry, Nominator):
        return {"address": entry.address, "balance": entry.balance}

    if isinstance(entry, Mapping):
        address = entry.get("address") or entry.get("accountId")
        if not address:
            logger.warning("Dropping nominator entry without address: %s", entry)
            return None
        nominator = {"address": address}
        if entry.get("balance") is not None:
            nominator["balance"] = entry["balance"]
        return nominator

    logger.warning("Dropping nominator entry of unexpected type: %r", entry)
    return None


def normalize_nominators(entries: Optional[Iterable[Any]]) -> List[Dict[str, Any]]:
    nominators = []
    for entry in entries or []:
        nominator = normalize_nominator(entry)
        if nominator is not None:
            nominators.append(nominator)
    return nominators


def nominator_address(entry: Any) -> Optional[str]:
    nominator = normalize_nominator(entry)
    return nominator["address"] if nominator else None


def normalize_exposure(exposure: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    exposure = exposure or {}
    others = []
    for other in exposure.get("others") or []:
        if not isinstance(other, Mapping) or not other.get("who"):
            continue
        others.append(
            {
                "who": other["who"],
                "value": _or_hex_zero(other.get("value")),
            }
        )
    return {
        "total": _or_hex_zero(exposure.get("total")),
        "own": _or_hex_zero(exposure.get("own")),
        "others": others,
    }


def normalize_slash(slash: ValidatorSlash) -> Dict[str, Any]:
    return {
        "address": slash.address,
        "era": slash.era,
        "total": _or_hex_zero(slash.total),
        "others": [
            {"address": o.get("address"), "value": _or_hex_zero(o.get("value"))}
            for o in slash.others or []
            if isinstance(o, Mapping) and o.get("address")
        ],
    }


def build_nomination_info(
    nomination: Nomination,
    nominators: Optional[List[Any]] = None,
    unclaimed: Optional[UnclaimedEraInfo] = None,
) -> Dict[str, Any]:
    """Raw `info` block of a validator.

    `nominators` overrides the nominators stored on the nomination row, e.g.
    when they were expanded to full nominator records. The count is always
    derived from the normalized list.
    """
    normalized = normalize_nominators(
        nomination.nominators if nominators is None else nominators
    )
    return {
        "nominators": normalized,
        "nominatorCount": len(normalized),
        "era": nomination.era,
        "exposure": normalize_exposure(nomination.exposure),
        "commission": nomination.commission,
        "apy": nomination.apy,
        "unclaimedEras": list(unclaimed.eras or []) if unclaimed else [],
        "total": _or_hex_zero(nomination.total),
        "selfStake": _or_hex_zero(nomination.self_stake),
    }


def build_validator_nomination_info(
    nomination: Nomination,
    validator: Optional[Validator],
    unclaimed: Optional[UnclaimedEraInfo] = None,
    slashes: Optional[List[ValidatorSlash]] = None,
    nominators: Optional[List[Any]] = None,
) -> schemas.ValidatorNominationInfo:
    if validator is None:
        logger.warning(
            "Validator %s has a nomination in era %s but no validator record",
            nomination.validator,
            nomination.era,
        )

    raw = {
        "id": nomination.validator,
        **_validator_fields(validator),
        "info": build_nomination_info(nomination, nominators, unclaimed),
        "slashes": [normalize_slash(s) for s in slashes or []],
    }
    return schemas.ValidatorNominationInfo.model_validate(raw)


def build_validator_trend(
    validator: Validator, nominations: List[Nomination]
) -> schemas.ValidatorNominationTrend:
    """History of a validator, one info entry per era with nominators unset."""
    info = []
    for nomination in nominations:
        entry = build_nomination_info(nomination)
        entry["nominators"] = None
        info.append(entry)

    raw = {"id": validator.id, **_validator_fields(validator), "info": info}
    raw.pop("blocked")
    return schemas.ValidatorNominationTrend.model_validate(raw)


def _validator_fields(validator: Optional[Validator]) -> Dict[str, Any]:
    if validator is None:
        return {
            "statusChange": {"commission": 0},
            "identity": dict(DEFAULT_IDENTITY),
            "stakerPoints": None,
            "averageApy": 0,
            "blocked": False,
        }
    return {
        "statusChange": validator.status_change or {"commission": 0},
        "identity": validator.identity or dict(DEFAULT_IDENTITY),
        "stakerPoints": validator.staker_points,
        "averageApy": validator.average_apy if validator.average_apy is not None else 0,
        "blocked": validator.blocked if validator.blocked is not None else False,
    }


def _or_hex_zero(value: Any) -> Any:
    return constants.HEX_ZERO if value is None or value == "" else value
