"""Command-line entry point."""

from __future__ import annotations

import argparse
import logging
import random
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from skewgen import __version__
from skewgen.config import load_cluster_config
from skewgen.errors import ConfigError, ProvisioningError
from skewgen.executor.emitter import DEFAULT_SEND_TIMEOUT, Emitter
from skewgen.executor.pacing import PacingPolicy
from skewgen.executor.provisioner import ensure_topic
from skewgen.generators.partition import DEFAULT_WEIGHT_TABLE, PartitionWeightTable
from skewgen.kafka.admin import KafkaAdmin
from skewgen.kafka.sender import KafkaSender
from skewgen.models.cluster import DEFAULT_BOOTSTRAP_SERVERS, ClusterConfig
from skewgen.models.topic import (
    DEFAULT_PARTITIONS,
    DEFAULT_REPLICATION_FACTOR,
    DEFAULT_TOPIC,
    TopicSpec,
)

console = Console(stderr=True)
logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {number:g}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="skewgen",
        description="Provision a Kafka topic and produce a paced, optionally skewed stream.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--topic", default=DEFAULT_TOPIC, help="Kafka topic to produce messages to")
    parser.add_argument(
        "--messages",
        type=_non_negative_int,
        default=1000,
        help="Number of messages to produce",
    )
    parser.add_argument(
        "--delay",
        type=_non_negative_int,
        default=0,
        help="Delay in milliseconds between each message",
    )
    parser.add_argument(
        "--random-delay",
        type=_non_negative_int,
        default=0,
        help="Use random delay between 0 and specified delay (milliseconds)",
    )
    parser.add_argument(
        "--start-from",
        type=int,
        default=0,
        help="First message number to start from",
    )
    parser.add_argument(
        "--weighted",
        action="store_true",
        help="Send 15%% of traffic to each of partitions 0, 3, 6, 9 and 5%% to the rest",
    )
    parser.add_argument(
        "--bootstrap-servers",
        default=None,
        help=f"Seed brokers (default: {DEFAULT_BOOTSTRAP_SERVERS})",
    )
    parser.add_argument(
        "--cluster-config",
        type=Path,
        default=None,
        help="YAML file with cluster and security settings",
    )
    parser.add_argument("--partitions", type=_positive_int, default=DEFAULT_PARTITIONS)
    parser.add_argument(
        "--replication-factor", type=_positive_int, default=DEFAULT_REPLICATION_FACTOR
    )
    parser.add_argument(
        "--send-timeout",
        type=_positive_float,
        default=DEFAULT_SEND_TIMEOUT,
        help="Seconds to wait for each delivery report",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def resolve_cluster_config(args: argparse.Namespace) -> ClusterConfig:
    if args.cluster_config is not None:
        return load_cluster_config(args.cluster_config, bootstrap_servers=args.bootstrap_servers)
    return ClusterConfig(bootstrap_servers=args.bootstrap_servers or DEFAULT_BOOTSTRAP_SERVERS)


def resolve_weight_table(
    args: argparse.Namespace, topic: TopicSpec
) -> PartitionWeightTable | None:
    if not args.weighted:
        return None
    if DEFAULT_WEIGHT_TABLE.max_partition >= topic.partitions:
        raise ConfigError(
            f"weighted mode targets partitions up to {DEFAULT_WEIGHT_TABLE.max_partition}, "
            f"but topic {topic.name} has only {topic.partitions} partitions"
        )
    return DEFAULT_WEIGHT_TABLE


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        cluster_config = resolve_cluster_config(args)
        topic = TopicSpec(
            name=args.topic,
            partitions=args.partitions,
            replication_factor=args.replication_factor,
        )
        pacing = PacingPolicy(delay_ms=args.delay, random_delay_ms=args.random_delay)
        weight_table = resolve_weight_table(args, topic)
    except (ConfigError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        return 1

    entropy = random.Random(args.seed)

    try:
        with KafkaSender(cluster_config) as sender:
            admin = KafkaAdmin(cluster_config.bootstrap_servers, cluster_config=cluster_config)
            ensure_topic(admin, topic)

            emitter = Emitter(
                sender,
                topic.name,
                send_timeout=args.send_timeout,
                entropy=entropy,
            )
            emitter.run(
                args.messages,
                start_offset=args.start_from,
                pacing=pacing,
                weight_table=weight_table,
            )
    except (ConfigError, ProvisioningError) as e:
        logger.error("%s", e)
        return 1
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted[/yellow]")
        return 130

    return 0
