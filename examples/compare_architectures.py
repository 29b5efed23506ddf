import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.append(str(PROJECT_ROOT / "src"))

import time

from cloud_arch_sim import ExperimentConfig, rank_results, run_all_scenarios
from cloud_arch_sim.report import format_finished_table, format_summary

# 配置文件路径
config_file = PROJECT_ROOT / "tests" / "data" / "experiment_config.yaml"

# 加载实验配置
config = ExperimentConfig.from_yaml(str(config_file))

tic = time.time()

outcomes = run_all_scenarios(config)

for run, result in outcomes:
    print(f"### Scenario: {result.name}")
    print(format_finished_table(run.finished_records))
    print(
        "Results [{}]: finished={}, avgResponse={:.4f}, avgCpu={:.4f}, totalCost=${:.6f}\n".format(
            result.name,
            result.finished_count,
            result.avg_response_time,
            result.avg_cpu_time,
            result.total_cost,
        )
    )

results = [r for _, r in outcomes]

print("=== Summary ===")
print(format_summary(results))

print("\n=== Cheapest first ===")
print(format_summary(rank_results(results, "total_cost")))

print(f"\nComparison finished in {time.time() - tic:.2f} seconds")
