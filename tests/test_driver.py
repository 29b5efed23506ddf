"""test_driver.py

测试 src/cloud_arch_sim/driver.py 中的执行驱动
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from cloud_arch_sim.config import ExperimentConfig, HostConfig, VmConfig, WorkloadConfig
from cloud_arch_sim.driver import create_datacenter, create_vms, run_scenario, to_cloudlet, to_record
from cloud_arch_sim.engine import Broker, Cloudlet, Simulation, UtilizationModelFull, VmAllocationError
from cloud_arch_sim.metrics import reduce_run
from cloud_arch_sim.profile import CONTAINER_PROFILE, SERVERLESS_PROFILE, VM_PROFILE
from cloud_arch_sim.workload import generate_tasks

DATA_DIR = Path(__file__).parent / "data"


class TestBuilders:
    """测试数据中心、并发单元和云任务的构造"""

    def test_create_datacenter(self):
        ec = ExperimentConfig(datacenter={"hosts": [{"count": 3, "pes": 4}]})  # type: ignore
        sim = Simulation()
        dc = create_datacenter(sim, ec)

        assert len(dc) == 3
        assert [h.host_id for h in dc] == [0, 1, 2]
        assert all(h.pes == 4 for h in dc)
        assert dc.characteristics.cost_per_second == 0.1
        assert sim.datacenters == [dc]

    def test_create_vms(self):
        vms = create_vms(CONTAINER_PROFILE, ExperimentConfig())

        assert len(vms) == 2
        assert all((vm.mips, vm.pes, vm.ram, vm.bw, vm.size) == (1000, 2, 2048, 1000, 10000) for vm in vms)

    def test_to_cloudlet(self):
        task = next(generate_tasks(SERVERLESS_PROFILE))
        c = to_cloudlet(task)

        assert c.cloudlet_id == task.task_id
        assert c.length == 1000
        assert c.pes == 1
        assert c.utilization is task.utilization
        assert (c.file_size, c.output_size) == (300, 300)

    def test_to_record_unfinished(self):
        with pytest.raises(ValueError, match="has not finished yet"):
            to_record(Cloudlet(0, 100, 1, UtilizationModelFull()))


class TestRunScenario:
    """测试 run_scenario 函数"""

    def test_vm_scenario(self):
        """4 台虚拟机各运行 45 个 10000 MI 的任务，分时共享 2000 MIPS"""
        run = run_scenario(VM_PROFILE)

        assert run.profile == VM_PROFILE
        assert run.submitted_count == 180
        assert len(run.finished_records) == 180
        assert run.elapsed_time == pytest.approx(225.0)
        assert run.cost_per_second == 0.1
        assert {r.vm_id for r in run.finished_records} == {0, 1, 2, 3}
        for r in run.finished_records:
            assert r.length == 10000
            assert r.processing_rate == 1000.0
            assert r.exec_start_time == 0.0
            assert r.total_execution_time == pytest.approx(225.0)

    def test_container_scenario(self):
        run = run_scenario(CONTAINER_PROFILE)

        assert len(run.finished_records) == 180
        assert run.elapsed_time == pytest.approx(360.0)
        assert all(r.length == 8000 for r in run.finished_records)

    def test_serverless_scenario(self):
        """1 个单元运行 180 个 20% 占用的 1000 MI 任务"""
        run = run_scenario(SERVERLESS_PROFILE)

        assert len(run.finished_records) == 180
        assert run.elapsed_time == pytest.approx(90.0)
        assert all(r.vm_id == 0 for r in run.finished_records)

    def test_scheduling_interval_disabled(self):
        ec = ExperimentConfig(datacenter={"scheduling_interval": 0.0})  # type: ignore
        assert run_scenario(VM_PROFILE, ec).elapsed_time == pytest.approx(225.0)

    def test_yaml_config(self):
        ec = ExperimentConfig.from_yaml(str(DATA_DIR / "experiment_config.yaml"))
        run = run_scenario(VM_PROFILE, ec)

        assert run.submitted_count == 36
        assert len(run.finished_records) == 36
        assert run.cost_per_second == 0.2

    def test_empty_workload(self):
        ec = ExperimentConfig(workload=WorkloadConfig(base_load=0, peak_load=0))
        run = run_scenario(VM_PROFILE, ec)

        assert run.finished_records == ()
        assert run.elapsed_time == 0.0

    def test_allocation_failure_propagates(self):
        """引擎异常不在执行驱动中处理"""
        ec = ExperimentConfig(vm=VmConfig(pes=16), datacenter={"hosts": [HostConfig(pes=8)]})  # type: ignore

        with pytest.raises(VmAllocationError):
            run_scenario(VM_PROFILE, ec)

    def test_fresh_engine_per_run(self):
        """重复运行同一场景得到相同的结果"""
        first = run_scenario(SERVERLESS_PROFILE)
        second = run_scenario(SERVERLESS_PROFILE)

        assert first.elapsed_time == second.elapsed_time
        assert first.finished_records == second.finished_records


class LossyBroker(Broker):
    """少报告一个已完成云任务的代理"""

    @property
    def finished_cloudlets(self) -> tuple[Cloudlet, ...]:
        return super().finished_cloudlets[:-1]


class TestIncompleteRun:
    """测试完成数量少于提交数量的场景"""

    def test_warning_and_submitted_count(self, caplog: pytest.LogCaptureFixture):
        with patch("cloud_arch_sim.driver.Broker", LossyBroker):
            with caplog.at_level(logging.WARNING, logger="cloud_arch_sim.driver"):
                run = run_scenario(VM_PROFILE)

        assert run.submitted_count == 180
        assert len(run.finished_records) == 179
        assert "Scenario VM finished 179 of 180 submitted tasks" in caplog.text
        assert any(r.levelno == logging.WARNING and r.name == "cloud_arch_sim.driver" for r in caplog.records)

    def test_metrics_cover_finished_tasks_only(self):
        with patch("cloud_arch_sim.driver.Broker", LossyBroker):
            result = reduce_run(run_scenario(VM_PROFILE))

        assert result.finished_count == 179
        assert result.invocation_cost == pytest.approx(179 * 0.00002)
        assert result.avg_response_time == pytest.approx(225.0)

    def test_complete_run_has_no_warning(self, caplog: pytest.LogCaptureFixture):
        with caplog.at_level(logging.WARNING, logger="cloud_arch_sim.driver"):
            run_scenario(SERVERLESS_PROFILE)

        assert "submitted tasks" not in caplog.text
