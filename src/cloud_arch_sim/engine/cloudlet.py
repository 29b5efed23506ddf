"""cloudlet.py

云任务 (cloudlet) 建模
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Optional

from .utilization import UtilizationModel

if TYPE_CHECKING:
    from .vm import Vm


class CloudletStatus(IntEnum):
    """云任务状态

    - INSTANTIATED: 初始状态
    - QUEUED: 云任务已经提交给代理
    - INEXEC: 云任务正在虚拟机上执行
    - SUCCESS: 云任务执行完成
    """

    INSTANTIATED = 0
    QUEUED = 1
    INEXEC = 2
    SUCCESS = 3


_VALID_STATUS_TRANSITIONS: dict[CloudletStatus, set[CloudletStatus]] = {
    CloudletStatus.INSTANTIATED: {CloudletStatus.QUEUED},
    CloudletStatus.QUEUED: {CloudletStatus.INEXEC},
    CloudletStatus.INEXEC: {CloudletStatus.SUCCESS},
    CloudletStatus.SUCCESS: set(),
}


@dataclass(slots=True, eq=False)
class Cloudlet:
    """云任务模型

    Args:
        cloudlet_id (int): 云任务ID
        length (int): 云任务的指令数量 (MI)
        pes (int): 云任务所需的处理单元数量
        utilization (UtilizationModel): 云任务的 CPU 利用率模型
        file_size (int): 输入数据大小
        output_size (int): 输出数据大小
    """

    cloudlet_id: int
    length: int
    pes: int
    utilization: UtilizationModel
    file_size: int = 300
    output_size: int = 300

    status: CloudletStatus = field(init=False, default=CloudletStatus.INSTANTIATED)
    remaining_length: float = field(init=False, default=0.0)
    allocated_mips: float = field(init=False, default=0.0)
    vm: Optional["Vm"] = field(init=False, default=None)
    submission_time: Optional[float] = field(init=False, default=None)
    exec_start_time: Optional[float] = field(init=False, default=None)
    finish_time: Optional[float] = field(init=False, default=None)

    def __post_init__(self):
        if self.length <= 0:
            raise ValueError(f"Cloudlet length must be positive, got {self.length}")
        if self.pes < 1:
            raise ValueError(f"Cloudlet PEs must be at least 1, got {self.pes}")

        self.remaining_length = float(self.length)

    def _transit(self, new_status: CloudletStatus):
        if new_status not in _VALID_STATUS_TRANSITIONS[self.status]:
            raise ValueError(f"Invalid status transition: {self.status.name} -> {new_status.name}")
        self.status = new_status

    def submit(self, time: float):
        """提交云任务给代理"""
        if time < 0:
            raise ValueError(f"Submission time ({time}) must be non-negative")

        self._transit(CloudletStatus.QUEUED)
        self.submission_time = time

    def run(self, time: float, vm: "Vm"):
        """云任务开始在指定虚拟机上执行"""
        if self.submission_time is None:
            raise ValueError("Cloudlet must be submitted before running")
        if time < self.submission_time:
            raise ValueError(f"Start time ({time}) cannot be earlier than submission time ({self.submission_time})")

        self._transit(CloudletStatus.INEXEC)
        self.exec_start_time = time
        self.vm = vm

    def finish(self, time: float):
        """云任务执行结束"""
        if self.exec_start_time is None:
            raise ValueError("Cloudlet must be running before finishing")
        if time < self.exec_start_time:
            raise ValueError(f"Finish time ({time}) cannot be earlier than start time ({self.exec_start_time})")

        self._transit(CloudletStatus.SUCCESS)
        self.finish_time = time
        self.remaining_length = 0.0
        self.allocated_mips = 0.0

    @property
    def finished(self) -> bool:
        return self.status == CloudletStatus.SUCCESS

    @property
    def total_execution_time(self) -> float:
        """从开始执行到执行完成所经过的仿真时间"""
        if self.exec_start_time is None or self.finish_time is None:
            raise ValueError(f"Cloudlet {self.cloudlet_id} has not finished yet")

        return self.finish_time - self.exec_start_time
