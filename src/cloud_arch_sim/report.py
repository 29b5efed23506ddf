"""report.py

比较结果的表格输出
"""

from typing import Sequence

from .records import FinishedTaskRecord, ScenarioResult


def format_finished_table(records: Sequence[FinishedTaskRecord]) -> str:
    """已完成任务明细表"""
    lines = [
        f"{'Task':>6} {'Unit':>5} {'Length':>8} {'Start (s)':>12} {'Finish (s)':>12} {'Exec (s)':>12}",
    ]
    for r in records:
        lines.append(
            f"{r.task_id:>6d} {r.vm_id:>5d} {r.length:>8d} "
            f"{r.exec_start_time:>12.4f} {r.finish_time:>12.4f} {r.total_execution_time:>12.4f}"
        )
    return "\n".join(lines)


def format_summary(results: Sequence[ScenarioResult]) -> str:
    """各架构场景的汇总比较表"""
    lines = [
        f"{'Scenario':<12} {'Units':<6} {'Finished':<10} {'Avg Response (s)':<18} {'Avg CPU (s)':<12} {'Total Cost $':<12}",
    ]
    for r in results:
        lines.append(
            f"{r.name:<12} {r.concurrency_units:<6d} {r.finished_count:<10d} "
            f"{r.avg_response_time:<18.4f} {r.avg_cpu_time:<12.4f} {r.total_cost:<12.6f}"
        )
    return "\n".join(lines)
