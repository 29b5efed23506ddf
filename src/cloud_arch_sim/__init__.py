from .comparator import ScenarioFailedError, compare_architectures, rank_results, run_all_scenarios
from .config import ExperimentConfig
from .driver import run_scenario
from .metrics import reduce_metrics, reduce_run
from .profile import DEFAULT_PROFILES, ArchitectureProfile
from .records import FinishedTaskRecord, ScenarioResult, ScenarioRun
from .workload import TaskDescriptor, generate_tasks, users_at

__all__ = [
    "ArchitectureProfile",
    "DEFAULT_PROFILES",
    "ExperimentConfig",
    "FinishedTaskRecord",
    "ScenarioFailedError",
    "ScenarioResult",
    "ScenarioRun",
    "TaskDescriptor",
    "compare_architectures",
    "generate_tasks",
    "rank_results",
    "reduce_metrics",
    "reduce_run",
    "run_all_scenarios",
    "run_scenario",
    "users_at",
]
