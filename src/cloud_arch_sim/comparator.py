"""comparator.py

按固定顺序依次运行三种架构场景并汇总比较
"""

import logging
from typing import Literal, Optional, Sequence

from .config import ExperimentConfig
from .driver import run_scenario
from .metrics import reduce_run
from .records import ScenarioResult, ScenarioRun

logger = logging.getLogger(__name__)

RankKey = Literal["total_cost", "avg_response_time", "avg_cpu_time"]

RANK_KEYS: tuple[RankKey, ...] = ("total_cost", "avg_response_time", "avg_cpu_time")


class ScenarioFailedError(Exception):
    """某个架构场景运行失败，整个比较随之中止

    Args:
        scenario (str): 失败的架构名称
        cause (BaseException): 导致失败的异常
    """

    def __init__(self, scenario: str, cause: BaseException):
        super().__init__(f"Scenario {scenario} failed: {cause}")
        self.scenario: str = scenario
        self.cause: BaseException = cause


def run_all_scenarios(config: Optional[ExperimentConfig] = None) -> tuple[tuple[ScenarioRun, ScenarioResult], ...]:
    """依次运行所有架构场景，返回每个场景的原始运行结果和汇总指标

    场景之间严格串行，每个场景使用独立的仿真实例。任何一个场景失败都会中止整个比较，
    不返回部分结果，也不重试。

    Raises:
        ScenarioFailedError: 某个场景运行或汇总失败
    """

    ec = config or ExperimentConfig()

    outcomes: list[tuple[ScenarioRun, ScenarioResult]] = []
    for profile in ec.profiles:
        try:
            run = run_scenario(profile, ec)
            result = reduce_run(run)
        except Exception as exc:
            logger.error("Scenario %s failed: %s", profile.name, exc)
            raise ScenarioFailedError(profile.name, exc) from exc

        logger.info(
            "Results [%s]: finished=%d, avgResponse=%.4f, avgCpu=%.4f, totalCost=$%.6f",
            result.name,
            result.finished_count,
            result.avg_response_time,
            result.avg_cpu_time,
            result.total_cost,
        )
        outcomes.append((run, result))

    return tuple(outcomes)


def compare_architectures(config: Optional[ExperimentConfig] = None) -> tuple[ScenarioResult, ...]:
    """按 VM、Container、Serverless 的顺序返回三个场景的汇总指标"""
    return tuple(result for _, result in run_all_scenarios(config))


def rank_results(results: Sequence[ScenarioResult], key: RankKey = "total_cost") -> list[ScenarioResult]:
    """按指定指标从小到大排列场景结果，指标相同时保持原有顺序"""
    if key not in RANK_KEYS:
        raise ValueError(f"Unknown ranking metric: {key}; expected one of {', '.join(RANK_KEYS)}")

    return sorted(results, key=lambda r: getattr(r, key))
