#!/usr/bin/env python3
"""
NEAR Exporter CLI Interface
"""

import sys
import time
import logging

import click

from .collector import CollectionOrchestrator
from .config import ExporterConfig
from .exceptions import ConfigurationError
from .response_format import format_json, standard_response
from .server import serve as serve_metrics
from .utils import setup_logging

logger = logging.getLogger(__name__)


def load_config(options: dict) -> ExporterConfig:
    """Build the configuration, exiting with status 1 if it is unusable"""
    try:
        return ExporterConfig.from_env(**options)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option('--rpc-addr', help='NEAR RPC base address (default: $NEAR_RPC_ADDR)')
@click.option('--listen-addr', help='Metrics listen address (default: $LISTEN_ADDR or :8080)')
@click.option('--timeout', type=float, help='Overall RPC request timeout in seconds (default: $NEAR_RPC_TIMEOUT or 2)')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--quiet', is_flag=True, help='Suppress output except results')
@click.pass_context
def cli(ctx, rpc_addr, listen_addr, timeout, debug, quiet):
    """NEAR validator Prometheus exporter"""
    if debug:
        setup_logging(logging.DEBUG)
    elif quiet:
        setup_logging(logging.ERROR)
    else:
        setup_logging(logging.INFO)

    ctx.obj = {'rpc_addr': rpc_addr, 'listen_addr': listen_addr, 'timeout': timeout}


@cli.command()
@click.pass_obj
def serve(options):
    """Serve /metrics, polling the node on every scrape"""
    config = load_config(options)
    logger.info(f"RPC address: {config.rpc_addr}")
    logger.info(f"Listen address: {config.listen_addr}")
    logger.info(f"RPC timeout: {config.timeout}s")
    try:
        serve_metrics(config)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@cli.command()
@click.option('--pretty', is_flag=True, help='Pretty-print JSON output (default: compact)')
@click.pass_obj
def collect(options, pretty):
    """Run a single scrape and print its samples as JSON"""
    config = load_config(options)

    start_time = time.time()
    result = CollectionOrchestrator.from_config(config).run()
    execution_time_ms = int((time.time() - start_time) * 1000)

    response = standard_response(result, execution_time_ms=execution_time_ms,
                                 rpc_addr=config.rpc_addr)
    click.echo(format_json(response, pretty=pretty))


if __name__ == '__main__':
    cli()
