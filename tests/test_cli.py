import json

import pytest

from conftest import FakeExecutor, FakeIgnite
from kubefire import cli
from kubefire.backends.ignite import IgniteNodeManager
from kubefire.global_config import KubefireConfig

NODES = {
    "c1-master-1": {"{{.Spec.CPUs}}": "2", "{{.Spec.Memory}}": "2.0 GB",
                    "{{.Spec.DiskSize}}": "10.0 GB", "{{.Status.Running}}": "true"},
}


@pytest.fixture
def executor(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.chdir(tmp_path)
    fake = FakeExecutor()
    fake.respond = FakeIgnite(NODES)
    monkeypatch.setattr(KubefireConfig, "executor", lambda self: fake)
    return fake


class TestNodeCommands:
    def test_list_json(self, executor, capsys):
        assert cli.main(["node", "list", "--format", "json"]) == 0
        out = json.loads(capsys.readouterr().out)
        assert out == [{
            "name": "c1-master-1",
            "spec": {"cpus": 2, "memory": "2.0 GB", "disk_size": "10.0 GB"},
            "status": {"running": True},
        }]

    def test_get_table(self, executor, capsys):
        assert cli.main(["node", "get", "c1-master-1"]) == 0
        out = capsys.readouterr().out
        assert "c1-master-1" in out
        assert "Running" in out

    def test_missing_node_exits_non_zero(self, executor, capsys):
        assert cli.main(["node", "get", "nope"]) == 1
        assert "not found" in capsys.readouterr().out

    def test_delete(self, executor):
        assert cli.main(["node", "rm", "c1-master-1"]) == 0
        assert executor.invocations("run")[0].args == ("rm", "c1-master-1", "--force")


class TestClusterCommands:
    def test_create_dry_run(self, executor, tmp_path, capsys):
        path = tmp_path / "cluster.yaml"
        path.write_text("name: c1\nimage: img\nworker:\n  count: 2\n")

        assert cli.main(["cluster", "create", "-c", str(path), "--dry-run"]) == 0
        assert "Create 2 worker node(s) of 'c1'" in capsys.readouterr().out
        assert executor.calls == []

    def test_create(self, executor, tmp_path):
        path = tmp_path / "cluster.yaml"
        path.write_text("name: c1\nimage: img\nworker:\n  count: 2\n")

        assert cli.main(["cluster", "create", "-c", str(path)]) == 0
        assert len(executor.invocations("launch")) == 3

    def test_invalid_config(self, executor, tmp_path):
        assert cli.main(["cluster", "delete", "-c", str(tmp_path / "missing.yaml")]) == 1


def test_node_manager_uses_config(executor):
    manager = KubefireConfig().load().node_manager()
    assert isinstance(manager, IgniteNodeManager)
    assert manager.executor is executor


class TestSettings:
    def test_invalid_environment_setting(self, executor, monkeypatch, capsys):
        monkeypatch.setenv("KUBEFIRE_MAX_PARALLEL_CREATES", "0")

        assert cli.main(["node", "list"]) == 1
        assert "max_parallel_creates" in capsys.readouterr().out
        assert executor.calls == []

    def test_wrongly_typed_global_setting(self, executor, tmp_path, capsys):
        config_dir = tmp_path / ".config" / "kubefire"
        config_dir.mkdir(parents=True)
        (config_dir / "config.yaml").write_text('max_parallel_creates: "8"\n')

        assert cli.main(["node", "list"]) == 1
        assert "max_parallel_creates" in capsys.readouterr().out
