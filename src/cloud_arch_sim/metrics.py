"""metrics.py

场景指标汇总
"""

from typing import Sequence

from .profile import ArchitectureProfile
from .records import FinishedTaskRecord, ScenarioResult, ScenarioRun


def reduce_metrics(
    finished_records: Sequence[FinishedTaskRecord],
    elapsed_time: float,
    concurrency_units: int,
    profile: ArchitectureProfile,
    cost_per_second: float,
) -> ScenarioResult:
    """将已完成任务记录汇总为单个场景的性能和成本指标

    CPU 时间按 `length / processing_rate` 估算，即假设任务执行期间独占 100% 的 CPU，
    不考虑分时共享带来的影响。

    Args:
        finished_records (Sequence[FinishedTaskRecord]): 已完成任务记录
        elapsed_time (float): 仿真结束时的时钟
        concurrency_units (int): 并发单元数量
        profile (ArchitectureProfile): 架构配置
        cost_per_second (float): 资源池每秒的价格

    Returns:
        ScenarioResult: 场景汇总指标
    """

    finished_count = len(finished_records)

    total_response = 0.0
    total_cpu = 0.0
    for r in finished_records:
        total_response += r.total_execution_time
        total_cpu += r.length / r.processing_rate

    avg_response = 0.0 if finished_count == 0 else total_response / finished_count
    avg_cpu = 0.0 if finished_count == 0 else total_cpu / finished_count

    # 并发单元在整个仿真期间的占用成本 + 按已完成任务计费的调用成本
    unit_cost = concurrency_units * elapsed_time * cost_per_second
    invocation_cost = finished_count * profile.per_invocation_cost

    return ScenarioResult(
        name=profile.name,
        concurrency_units=concurrency_units,
        finished_count=finished_count,
        avg_response_time=avg_response,
        avg_cpu_time=avg_cpu,
        total_cost=unit_cost + invocation_cost,
        unit_cost=unit_cost,
        invocation_cost=invocation_cost,
    )


def reduce_run(run: ScenarioRun) -> ScenarioResult:
    """汇总执行驱动返回的场景运行结果"""
    return reduce_metrics(
        run.finished_records,
        run.elapsed_time,
        run.profile.concurrency_units,
        run.profile,
        run.cost_per_second,
    )
