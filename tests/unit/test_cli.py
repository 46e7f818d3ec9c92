import logging

import pytest

from skewgen import cli
from skewgen.errors import ConfigError, ProvisioningError
from skewgen.generators.payload import sequence_of
from tests.unit.fakes import FakeAdmin, FakeSender


class ContextSender(FakeSender):
    instances: list["ContextSender"] = []

    def __init__(self, cluster_config):
        super().__init__()
        self.cluster_config = cluster_config
        self.closed = False
        ContextSender.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.closed = True


@pytest.fixture
def harness(monkeypatch):
    ContextSender.instances = []
    admins: list[FakeAdmin] = []
    state = {"admin_error": None}

    def admin_factory(bootstrap_servers, cluster_config=None):
        admin = FakeAdmin(error=state["admin_error"])
        admin.bootstrap_servers = bootstrap_servers
        admins.append(admin)
        return admin

    monkeypatch.setattr(cli, "KafkaSender", ContextSender)
    monkeypatch.setattr(cli, "KafkaAdmin", admin_factory)
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)
    return ContextSender.instances, admins, state


def test_defaults(harness):
    senders, admins, _ = harness

    assert cli.main(["--messages", "3"]) == 0

    (sender,) = senders
    assert sender.closed
    assert sender.cluster_config.bootstrap_servers == "kafka-cluster-kafka-bootstrap:9092"
    spec = admins[0].calls[0]
    assert (spec.name, spec.partitions, spec.replication_factor) == ("test-topic", 12, 3)
    assert [sequence_of(m.payload) for m in sender.sent] == [0, 1, 2]
    assert all(m.partition is None for m in sender.sent)


def test_weighted_with_start_offset(harness):
    senders, _, _ = harness

    code = cli.main(
        [
            "--topic", "skewed",
            "--messages", "50",
            "--weighted",
            "--start-from", "9",
            "--seed", "1",
        ]
    )

    assert code == 0
    sent = senders[0].sent
    assert [sequence_of(m.payload) for m in sent] == list(range(9, 59))
    assert all(m.topic == "skewed" and 0 <= m.partition < 12 for m in sent)


def test_same_seed_gives_same_partitions(harness):
    senders, _, _ = harness

    cli.main(["--messages", "30", "--weighted", "--seed", "42"])
    cli.main(["--messages", "30", "--weighted", "--seed", "42"])

    first, second = senders
    assert [m.partition for m in first.sent] == [m.partition for m in second.sent]


def test_provisioning_failure_exits_non_zero_and_closes_client(harness, caplog):
    senders, _, state = harness
    state["admin_error"] = ProvisioningError("test-topic", "Broker: Cluster authorization failed")

    with caplog.at_level(logging.ERROR):
        assert cli.main(["--messages", "3"]) == 1

    assert senders[0].sent == []
    assert senders[0].closed
    assert "Cluster authorization failed" in caplog.text


def test_weighted_needs_enough_partitions(harness):
    senders, _, _ = harness

    assert cli.main(["--weighted", "--partitions", "6"]) == 1
    assert senders == []


def test_bootstrap_servers_flag(harness):
    senders, admins, _ = harness

    cli.main(["--messages", "0", "--bootstrap-servers", "localhost:19092"])

    assert senders[0].cluster_config.bootstrap_servers == "localhost:19092"
    assert admins[0].bootstrap_servers == "localhost:19092"


def test_cluster_config_file(harness, tmp_path):
    senders, _, _ = harness
    path = tmp_path / "cluster.yaml"
    path.write_text("bootstrap_servers: secure:9093\nsecurity_protocol: SSL\n")

    assert cli.main(["--messages", "0", "--cluster-config", str(path)]) == 0
    assert senders[0].cluster_config.to_client_config()["security.protocol"] == "SSL"


def test_bad_cluster_config_exits_non_zero(harness, tmp_path):
    path = tmp_path / "cluster.yaml"
    path.write_text("nonsense: true\n")

    assert cli.main(["--cluster-config", str(path)]) == 1


@pytest.mark.parametrize(
    "argv",
    [["--messages", "-1"], ["--delay", "-5"], ["--partitions", "0"], ["--send-timeout", "0"]],
)
def test_invalid_arguments_are_usage_errors(harness, argv):
    with pytest.raises(SystemExit) as exc_info:
        cli.main(argv)
    assert exc_info.value.code == 2


@pytest.mark.parametrize(
    "contents",
    [
        "bootstrap_servers: localhost:9092\nproperties:\n  no.such.property: 1\n",
        "bootstrap_servers: localhost:9092\n"
        "security_protocol: SASL_PLAINTEXT\n"
        "sasl_mechanism: BOGUS\n",
    ],
    ids=["unknown-property", "unknown-sasl-mechanism"],
)
def test_client_settings_rejected_by_librdkafka_exit_non_zero(
    monkeypatch, tmp_path, caplog, contents
):
    monkeypatch.setattr(cli, "configure_logging", lambda level: None)
    path = tmp_path / "cluster.yaml"
    path.write_text(contents)

    with caplog.at_level(logging.ERROR):
        assert cli.main(["--messages", "1", "--cluster-config", str(path)]) == 1

    assert "unable to create kafka client" in caplog.text


def test_admin_client_config_error_exits_non_zero_and_closes_client(harness, monkeypatch, caplog):
    senders, _, _ = harness

    def rejecting_admin(bootstrap_servers, cluster_config=None):
        raise ConfigError("unable to create kafka admin client: No such configuration property")

    monkeypatch.setattr(cli, "KafkaAdmin", rejecting_admin)

    with caplog.at_level(logging.ERROR):
        assert cli.main(["--messages", "3"]) == 1

    assert senders[0].sent == []
    assert senders[0].closed
    assert "unable to create kafka admin client" in caplog.text
