"""records.py

仿真结果记录定义
"""

from typing import NamedTuple

from .profile import ArchitectureProfile


class FinishedTaskRecord(NamedTuple):
    """已完成任务的执行记录

    Attributes:
        task_id (int): 任务ID
        vm_id (int): 执行该任务的并发单元ID
        length (int): 任务实际执行的指令数量
        processing_rate (float): 执行该任务的并发单元的计算速度 (MIPS)
        exec_start_time (float): 任务开始执行的时间
        finish_time (float): 任务执行完成的时间
        total_execution_time (float): 任务从开始执行到完成所经过的仿真时间
    """

    task_id: int
    vm_id: int
    length: int
    processing_rate: float
    exec_start_time: float
    finish_time: float
    total_execution_time: float


class ScenarioRun(NamedTuple):
    """单个架构场景的原始运行结果

    Attributes:
        profile (ArchitectureProfile): 场景使用的架构配置
        finished_records (tuple[FinishedTaskRecord, ...]): 按完成顺序排列的已完成任务记录
        elapsed_time (float): 仿真结束时的时钟
        cost_per_second (float): 资源池每秒的价格
        submitted_count (int): 提交的任务数量
    """

    profile: ArchitectureProfile
    finished_records: tuple[FinishedTaskRecord, ...]
    elapsed_time: float
    cost_per_second: float
    submitted_count: int


class ScenarioResult(NamedTuple):
    """单个架构场景的汇总指标

    Attributes:
        name (str): 架构名称
        concurrency_units (int): 并发单元数量
        finished_count (int): 已完成任务数量
        avg_response_time (float): 平均响应时间 (无已完成任务时为 0.0)
        avg_cpu_time (float): 平均 CPU 时间 (无已完成任务时为 0.0)
        total_cost (float): 总成本
        unit_cost (float): 并发单元的占用成本
        invocation_cost (float): 按次计费成本
    """

    name: str
    concurrency_units: int
    finished_count: int
    avg_response_time: float
    avg_cpu_time: float
    total_cost: float
    unit_cost: float
    invocation_cost: float
