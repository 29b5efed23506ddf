"""test_cloudlet.py

测试 src/cloud_arch_sim/engine/cloudlet.py 中的 Cloudlet 类
"""

import pytest

from cloud_arch_sim.engine import Cloudlet, CloudletStatus, UtilizationModelFull, Vm


class TestCloudlet:
    """测试 Cloudlet 类"""

    @pytest.fixture
    def sample_cloudlet(self) -> Cloudlet:
        """创建示例云任务"""
        return Cloudlet(cloudlet_id=3, length=10000, pes=1, utilization=UtilizationModelFull())

    @pytest.fixture
    def sample_vm(self) -> Vm:
        return Vm(vm_id=0, mips=1000, pes=2, ram=2048, bw=1000, size=10000)

    def test_cloudlet_initialization(self, sample_cloudlet: Cloudlet):
        """测试云任务初始化"""
        assert sample_cloudlet.cloudlet_id == 3
        assert sample_cloudlet.length == 10000
        assert sample_cloudlet.pes == 1
        assert sample_cloudlet.file_size == 300
        assert sample_cloudlet.output_size == 300
        assert sample_cloudlet.status == CloudletStatus.INSTANTIATED
        assert sample_cloudlet.remaining_length == 10000.0  # 应该等于 length
        assert sample_cloudlet.vm is None
        assert not sample_cloudlet.finished

    @pytest.mark.parametrize("length", [0, -1])
    def test_non_positive_length(self, length: int):
        """测试指令数量必须为正"""
        with pytest.raises(ValueError, match="Cloudlet length must be positive"):
            Cloudlet(cloudlet_id=0, length=length, pes=1, utilization=UtilizationModelFull())

    def test_invalid_pes(self):
        """测试处理单元数量至少为 1"""
        with pytest.raises(ValueError, match="Cloudlet PEs must be at least 1"):
            Cloudlet(cloudlet_id=0, length=100, pes=0, utilization=UtilizationModelFull())

    def test_full_lifecycle(self, sample_cloudlet: Cloudlet, sample_vm: Vm):
        """测试完整的状态转换"""
        sample_cloudlet.submit(0.0)
        assert sample_cloudlet.status == CloudletStatus.QUEUED
        assert sample_cloudlet.submission_time == 0.0

        sample_cloudlet.run(1.0, sample_vm)
        assert sample_cloudlet.status == CloudletStatus.INEXEC
        assert sample_cloudlet.exec_start_time == 1.0
        assert sample_cloudlet.vm is sample_vm

        sample_cloudlet.finish(4.5)
        assert sample_cloudlet.status == CloudletStatus.SUCCESS
        assert sample_cloudlet.finished
        assert sample_cloudlet.finish_time == 4.5
        assert sample_cloudlet.remaining_length == 0.0
        assert sample_cloudlet.total_execution_time == 3.5

    def test_submit_negative_time(self, sample_cloudlet: Cloudlet):
        """测试提交时间不能为负"""
        with pytest.raises(ValueError, match="must be non-negative"):
            sample_cloudlet.submit(-1.0)

    def test_run_without_submit(self, sample_cloudlet: Cloudlet, sample_vm: Vm):
        """测试未提交就运行"""
        with pytest.raises(ValueError, match="must be submitted before running"):
            sample_cloudlet.run(0.0, sample_vm)

    def test_run_before_submission(self, sample_cloudlet: Cloudlet, sample_vm: Vm):
        """测试开始时间早于提交时间"""
        sample_cloudlet.submit(2.0)
        with pytest.raises(ValueError, match="cannot be earlier than submission time"):
            sample_cloudlet.run(1.0, sample_vm)

    def test_finish_without_run(self, sample_cloudlet: Cloudlet):
        """测试未运行就完成"""
        sample_cloudlet.submit(0.0)
        with pytest.raises(ValueError, match="must be running before finishing"):
            sample_cloudlet.finish(1.0)

    def test_finish_before_start(self, sample_cloudlet: Cloudlet, sample_vm: Vm):
        """测试完成时间早于开始时间"""
        sample_cloudlet.submit(0.0)
        sample_cloudlet.run(2.0, sample_vm)
        with pytest.raises(ValueError, match="cannot be earlier than start time"):
            sample_cloudlet.finish(1.5)

    def test_submit_twice(self, sample_cloudlet: Cloudlet):
        """测试非法的状态转换"""
        sample_cloudlet.submit(0.0)
        with pytest.raises(ValueError, match="Invalid status transition: QUEUED -> QUEUED"):
            sample_cloudlet.submit(0.0)

    def test_total_execution_time_before_finish(self, sample_cloudlet: Cloudlet):
        """测试未完成的云任务没有执行时间"""
        with pytest.raises(ValueError, match="has not finished yet"):
            _ = sample_cloudlet.total_execution_time
