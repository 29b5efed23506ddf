"""workload.py

昼夜负载生成模块

24 小时内每小时产生一批任务，每隔 `peak_period` 小时出现一次流量高峰。
"""

from dataclasses import dataclass
from typing import Iterator, Optional

from .config import WorkloadConfig
from .engine import UtilizationModel, UtilizationModelDynamic, UtilizationModelFull
from .profile import ArchitectureProfile


@dataclass(frozen=True, slots=True)
class TaskDescriptor:
    """提交给执行驱动的任务

    Attributes:
        task_id (int): 任务ID (按生成顺序编号)
        hour (int): 任务所属的小时
        user (int): 任务在该小时内的用户序号
        length (int): 任务的指令数量
        cost_factor (float): 生成任务时使用的架构缩放系数
        utilization (UtilizationModel): 任务的 CPU 利用率模型
        file_size (int): 输入数据大小
        output_size (int): 输出数据大小
        pes (int): 任务所需的处理单元数量
    """

    task_id: int
    hour: int
    user: int
    length: int
    cost_factor: float
    utilization: UtilizationModel
    file_size: int = 300
    output_size: int = 300
    pes: int = 1

    def __post_init__(self):
        if self.length <= 0:
            raise ValueError(f"Task length must be positive, got {self.length}")
        if self.pes < 1:
            raise ValueError(f"Task PEs must be at least 1, got {self.pes}")


def users_at(hour: int, config: Optional[WorkloadConfig] = None) -> int:
    """指定小时内的用户数：高峰小时为 `peak_load`，其余为 `base_load`"""
    wc = config or WorkloadConfig()
    return wc.peak_load if hour % wc.peak_period == 0 else wc.base_load


def workload_size(config: Optional[WorkloadConfig] = None) -> int:
    """整个时间范围内的任务总数"""
    wc = config or WorkloadConfig()
    return sum(users_at(h, wc) for h in range(wc.hours))


def generate_tasks(profile: ArchitectureProfile, config: Optional[WorkloadConfig] = None) -> Iterator[TaskDescriptor]:
    """按照架构配置生成整个时间范围内的任务

    每次调用都会生成一组新的任务实例；返回的生成器只能遍历一次。

    Args:
        profile (ArchitectureProfile): 架构配置
        config (WorkloadConfig | None): 工作负载配置，为 None 时使用默认配置

    Yields:
        TaskDescriptor: 按 (小时, 用户) 顺序生成的任务
    """

    wc = config or WorkloadConfig()

    length = profile.task_length

    # 同一批任务共享同一个利用率模型实例
    utilization: UtilizationModel
    if profile.serverless:
        utilization = UtilizationModelDynamic(profile.utilization_fraction)
    else:
        utilization = UtilizationModelFull()

    task_id = 0
    for hour in range(wc.hours):
        for user in range(users_at(hour, wc)):
            yield TaskDescriptor(
                task_id=task_id,
                hour=hour,
                user=user,
                length=length,
                cost_factor=profile.cost_factor,
                utilization=utilization,
                file_size=wc.file_size,
                output_size=wc.output_size,
            )
            task_id += 1
