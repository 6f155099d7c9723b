"""Off-Chain Data CLI: replicates block files into the off-chain store.

Invariants:
    - Configuration validated before any block is read (ConfigurationError -> exit 2)
    - Block files processed in the order given; a fatal error stops the run (exit 1)
    - Simulated store failures are retried by the replicator, never fatal on their own

Design Decisions:
    - Blocks read from files (as written by `peer channel fetch`): the ledger network
      client stays outside this package
    - Components wired explicitly here, nowhere else
"""

import argparse
import logging
import sys
from pathlib import Path

from offchain_data.config import Settings, get_settings
from offchain_data.core.block import decode_block
from offchain_data.core.errors import ConfigurationError, OffChainDataError
from offchain_data.core.failure_simulation import FailureSimulator
from offchain_data.infrastructure.checkpoint import FileCheckpointer
from offchain_data.infrastructure.flat_file_store import FlatFileStore
from offchain_data.infrastructure.observability import setup_logging
from offchain_data.services.replicate_blocks import BlockReplicator

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Replicate ledger writes from block files to the off-chain store",
    )
    parser.add_argument(
        "block_files",
        nargs="+",
        type=Path,
        help="Protobuf-encoded block files, in ledger order",
    )
    return parser.parse_args(argv)


def build_replicator(settings: Settings) -> BlockReplicator:
    store = FlatFileStore(
        settings.store_file, FailureSimulator(settings.simulated_failure_count),
    )
    return BlockReplicator(
        store,
        FileCheckpointer(settings.checkpoint_file),
        max_write_attempts=settings.max_write_attempts,
    )


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        settings = get_settings()
    except ConfigurationError as e:
        print(e.message, file=sys.stderr)
        return 2

    setup_logging(settings.log_level, settings.log_format)

    try:
        replicator = build_replicator(settings)
        total = 0
        for block_file in args.block_files:
            try:
                raw = block_file.read_bytes()
            except OSError as e:
                logger.critical("Cannot read block file %s: %s", block_file, e)
                return 1
            total += replicator.process_block(decode_block(raw))
    except OffChainDataError as e:
        logger.critical(
            e.message,
            extra={
                "error_code": e.code,
                "block_number": e.context.block_number,
                "transaction_id": e.context.transaction_id,
                "stage": e.context.stage,
            },
        )
        return 1

    logger.info("Replication finished", extra={"writes": total})
    return 0


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
