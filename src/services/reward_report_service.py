"""Adapter for the external staking rewards collector.

The collector is a separate program that reads a JSON config, fetches the
reward history of the configured addresses and writes one `<address>.json`
report per address. Every call gets its own temporary work directory, so
concurrent reports never share files.
"""

import asyncio
import json
import logging
import os
import shlex
import tempfile
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import ValidationError

import schemas
from core import constants
from core.config import Settings
from core.errors import NoRewardsFound, ReportDateTooEarly, SubprocessFailed
from schemas.reward_report import (
    SRCResult,
    StakingRewardsAddress,
    StakingRewardsCollectorInput,
)
from utils.extension_utils import day_to_milliseconds

logger = logging.getLogger(__name__)

INPUT_FILE_NAME = "userInput.json"


class RewardReportService:
    def __init__(self, settings: Settings):
        self.command = settings.REWARD_REPORT_COMMAND
        self.work_dir = settings.STAKING_REWARDS_COLLECTOR_DIR
        self.timeout = settings.REWARD_REPORT_TIMEOUT_SECONDS

    async def generate(
        self,
        stash: str,
        network: str,
        start: Optional[str] = None,
        end: Optional[str] = None,
        currency: str = constants.REWARD_REPORT_DEFAULT_CURRENCY,
        price_data: bool = True,
        start_balance: float = 0.0,
    ) -> schemas.StashRewards:
        collector_input = StakingRewardsCollectorInput(
            start=start or constants.REWARD_REPORT_DEFAULT_START,
            end=end or datetime.now(timezone.utc).strftime("%Y-%m-%d"),
            currency=currency,
            price_data=str(price_data).lower(),
            addresses=[
                StakingRewardsAddress(
                    name=stash, address=stash, start_balance=start_balance, network=network
                )
            ],
        )

        with tempfile.TemporaryDirectory(prefix="reward-report-") as tmp_dir:
            input_path = os.path.join(tmp_dir, INPUT_FILE_NAME)
            with open(input_path, "w") as f:
                f.write(collector_input.model_dump_json(by_alias=True, indent=2))

            stdout = await self._run(input_path, tmp_dir)
            if constants.REWARD_REPORT_NO_REWARDS in stdout:
                raise NoRewardsFound(f"No rewards found for {stash}")
            if constants.REWARD_REPORT_TOO_EARLY in stdout:
                raise ReportDateTooEarly(
                    f"Start date {collector_input.start} is too early for {stash}"
                )

            result = self._read_result(os.path.join(tmp_dir, f"{stash}.json"))

        return make_response(stash, result)

    async def _run(self, input_path: str, output_dir: str) -> str:
        args = shlex.split(self.command) + ["--input", input_path, "--output", output_dir]
        logger.info("Running reward report: %s", " ".join(args))
        try:
            process = await asyncio.create_subprocess_exec(
                *args,
                cwd=self.work_dir,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise SubprocessFailed(f"Failed to start reward report: {e}") from e

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.timeout
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            raise SubprocessFailed(
                f"Reward report did not finish within {self.timeout} seconds"
            )
        except asyncio.CancelledError:
            process.kill()
            await process.wait()
            raise

        output = stdout.decode(errors="replace")
        if process.returncode != 0:
            # the collector prints its sentinels before exiting non-zero
            if (
                constants.REWARD_REPORT_NO_REWARDS in output
                or constants.REWARD_REPORT_TOO_EARLY in output
            ):
                return output
            logger.error(
                "Reward report exited with %s: %s",
                process.returncode,
                stderr.decode(errors="replace").strip(),
            )
            raise SubprocessFailed(
                f"Reward report exited with code {process.returncode}"
            )
        return output

    def _read_result(self, path: str) -> SRCResult:
        try:
            with open(path) as f:
                return SRCResult.model_validate(json.load(f))
        except FileNotFoundError as e:
            raise SubprocessFailed("Reward report wrote no output") from e
        except (ValueError, ValidationError) as e:
            raise SubprocessFailed(f"Failed to parse reward report: {e}") from e


def make_response(stash: str, result: SRCResult) -> schemas.StashRewards:
    """Convert a collector report into a reward ledger.

    Days before the first non-zero reward are dropped.
    """
    era_rewards: List[schemas.StashEraReward] = []
    for daily in result.data.list:
        if not era_rewards and daily.amount_human_readable == 0.0:
            continue
        era_rewards.append(
            schemas.StashEraReward(
                era=0,
                amount=daily.amount_human_readable,
                timestamp=day_to_milliseconds(daily.day),
                price=daily.price,
                total=daily.value_fiat,
            )
        )

    return schemas.StashRewards(
        stash=stash,
        era_rewards=era_rewards,
        total_in_fiat=sum(r.total for r in era_rewards),
    )
