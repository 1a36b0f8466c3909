#!/usr/bin/env python3
"""
Basic usage example for near-exporter
"""

from near_exporter import CollectionOrchestrator, ExporterConfig, setup_logging


def main():
    setup_logging()

    config = ExporterConfig(rpc_addr="http://127.0.0.1:3030")
    orchestrator = CollectionOrchestrator.from_config(config)

    print("Collecting one scrape...")
    result = orchestrator.run()
    if result.aborted:
        print(f"  scrape aborted: {result.abort_cause}")
    for sample in result.samples:
        labels = ",".join(f"{k}={v}" for k, v in sample.labels.items())
        if sample.is_valid:
            print(f"  {sample.descriptor.name}{{{labels}}} {sample.value}")
        else:
            print(f"  {sample.descriptor.name}{{{labels}}} INVALID: {sample.error}")


if __name__ == "__main__":
    main()
