#!/usr/bin/env python3
"""
NEAR Validator Collector
Runs the scrape pipeline (status gate, validator fetch, mapping) and bridges
the resulting samples into prometheus_client gauge families
"""

import time
import logging
from collections import Counter
from typing import Dict, Iterator, List, Optional

import requests
from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector

from .config import ExporterConfig
from .exceptions import CollectionError, SyncingError
from .fetchers import RpcSession, SyncStatusChecker, ValidatorSetFetcher
from .mapper import SampleMapper
from .models import DESCRIPTORS, CollectionResult, MetricSample

logger = logging.getLogger(__name__)

INVALID_SAMPLES_METRIC = "near_exporter_invalid_samples"


def abort_samples(cause: str) -> List[MetricSample]:
    """One invalid sample per declared descriptor, all sharing the same cause"""
    return [MetricSample.invalid(descriptor, cause) for descriptor in DESCRIPTORS]


class CollectionOrchestrator:
    """Sequences one scrape: check sync state, fetch validators, map to samples"""

    def __init__(self, checker: SyncStatusChecker, fetcher: ValidatorSetFetcher,
                 mapper: Optional[SampleMapper] = None):
        self.checker = checker
        self.fetcher = fetcher
        self.mapper = mapper or SampleMapper()

    @classmethod
    def from_config(cls, config: ExporterConfig,
                    session: Optional[requests.Session] = None) -> "CollectionOrchestrator":
        rpc = RpcSession(timeout=config.timeout, session=session)
        return cls(
            checker=SyncStatusChecker(rpc, config.status_url),
            fetcher=ValidatorSetFetcher(rpc, config.rpc_addr),
        )

    def run(self) -> CollectionResult:
        """Run one scrape; errors become invalid samples and an abort cause"""
        start_time = time.time()

        logger.debug("Checking node sync status")
        try:
            syncing = self.checker.check_sync_status()
        except CollectionError as e:
            return self._abort(f"checkSyncStatus: {e}")

        # Validator data is unreliable until the node catches up
        if syncing:
            return self._abort(str(SyncingError()))

        logger.debug("Fetching validator set")
        try:
            validator_set = self.fetcher.get_validator_info()
        except CollectionError as e:
            return self._abort(f"getValidatorInfo: {e}")

        samples = self.mapper.map_to_samples(validator_set)
        logger.debug(f"Scrape produced {len(samples)} samples in {time.time() - start_time:.3f}s")
        return CollectionResult(samples)

    def collect(self) -> List[MetricSample]:
        """Produce the samples for one scrape"""
        return self.run().samples

    def _abort(self, cause: str) -> CollectionResult:
        logger.warning(f"Scrape aborted: {cause}")
        return CollectionResult(abort_samples(cause), abort_cause=cause)


class NearCollector(Collector):
    """prometheus_client collector exposing the six validator gauges"""

    def __init__(self, orchestrator: CollectionOrchestrator):
        self.orchestrator = orchestrator

    @staticmethod
    def _families() -> Dict[str, GaugeMetricFamily]:
        return {
            descriptor.name: GaugeMetricFamily(
                descriptor.name, descriptor.documentation, labels=list(descriptor.labelnames))
            for descriptor in DESCRIPTORS
        }

    @staticmethod
    def _invalid_family(counts: Counter) -> GaugeMetricFamily:
        family = GaugeMetricFamily(
            INVALID_SAMPLES_METRIC,
            "Number of samples per metric that could not be reported on the last scrape",
            labels=["metric"])
        for descriptor in DESCRIPTORS:
            family.add_metric([descriptor.name], counts.get(descriptor.name, 0))
        return family

    def describe(self) -> Iterator[GaugeMetricFamily]:
        yield from self._families().values()
        yield self._invalid_family(Counter())

    def collect(self) -> Iterator[GaugeMetricFamily]:
        families = self._families()
        invalid = Counter()

        for sample in self.orchestrator.collect():
            name = sample.descriptor.name
            if not sample.is_valid:
                invalid[name] += 1
                logger.debug(f"Invalid sample for {name} {sample.labels or ''}: {sample.error}")
                continue
            label_values = [sample.labels[label] for label in sample.descriptor.labelnames]
            families[name].add_metric(label_values, sample.value)

        yield from families.values()
        yield self._invalid_family(invalid)
