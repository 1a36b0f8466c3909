#!/usr/bin/env python3
"""
Sample Mapper
Turns a fetched validator set into gauge samples, one failure at a time
"""

import re
import math
import logging
from typing import List

from .exceptions import SampleConversionError
from .models import (
    ACTIVE_VALIDATORS,
    EPOCH_START_HEIGHT,
    VALIDATOR_EXPECTED_BLOCKS,
    VALIDATOR_IS_SLASHED,
    VALIDATOR_PRODUCED_BLOCKS,
    VALIDATOR_STAKE,
    MetricSample,
    ValidatorRecord,
    ValidatorSet,
)

logger = logging.getLogger(__name__)


# ASCII decimal numeral with optional sign, fraction and exponent
STAKE_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def parse_stake(record: ValidatorRecord) -> float:
    """Parse a yoctoNEAR stake string into a float approximation"""
    if not STAKE_PATTERN.fullmatch(record.stake):
        raise SampleConversionError(record.account_id, record.stake)
    stake = float(record.stake)
    if not math.isfinite(stake):
        raise SampleConversionError(record.account_id, record.stake)
    return stake


class SampleMapper:
    """Maps a ValidatorSet onto samples; never fails as a whole"""

    def map_to_samples(self, validator_set: ValidatorSet) -> List[MetricSample]:
        samples = [
            MetricSample.valid(ACTIVE_VALIDATORS, len(validator_set.current_validators)),
            MetricSample.valid(EPOCH_START_HEIGHT, validator_set.epoch_start_height),
        ]

        for record in validator_set.current_validators:
            samples.extend(self._map_record(record))

        return samples

    def _map_record(self, record: ValidatorRecord) -> List[MetricSample]:
        account = record.account_id
        samples = []

        try:
            stake = parse_stake(record)
        except SampleConversionError as e:
            logger.warning(f"Validator {account}: {e}")
            samples.append(MetricSample.invalid(VALIDATOR_STAKE, str(e), account_id=account))
        else:
            samples.append(MetricSample.valid(VALIDATOR_STAKE, stake, account_id=account))

        samples.append(MetricSample.valid(VALIDATOR_EXPECTED_BLOCKS, record.num_expected_blocks,
                                          account_id=account))
        samples.append(MetricSample.valid(VALIDATOR_PRODUCED_BLOCKS, record.num_produced_blocks,
                                          account_id=account))
        samples.append(MetricSample.valid(VALIDATOR_IS_SLASHED, 1 if record.is_slashed else 0,
                                          account_id=account))
        return samples
