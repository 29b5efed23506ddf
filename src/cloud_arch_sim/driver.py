"""driver.py

执行驱动：将工作负载和架构配置绑定到仿真引擎上运行
"""

import logging
from typing import Optional

from .config import ExperimentConfig
from .engine import Broker, Cloudlet, Datacenter, DatacenterCharacteristics, Host, Simulation, Vm
from .profile import ArchitectureProfile
from .records import FinishedTaskRecord, ScenarioRun
from .workload import TaskDescriptor, generate_tasks

logger = logging.getLogger(__name__)


def create_datacenter(simulation: Simulation, config: ExperimentConfig) -> Datacenter:
    """按照配置创建数据中心"""
    dc = config.datacenter

    hosts: list[Host] = []
    for hc in dc.hosts:
        for _ in range(hc.count):
            hosts.append(Host(len(hosts), hc.pes, hc.pe_mips, hc.ram, hc.bw, hc.storage))

    characteristics = DatacenterCharacteristics(
        cost_per_second=dc.cost_per_second,
        cost_per_mem=dc.cost_per_mem,
        cost_per_storage=dc.cost_per_storage,
        cost_per_bw=dc.cost_per_bw,
    )

    return Datacenter(simulation, hosts, characteristics)


def create_vms(profile: ArchitectureProfile, config: ExperimentConfig) -> list[Vm]:
    """创建 `profile.concurrency_units` 个规格相同的并发单元"""
    vc = config.vm
    return [Vm(i, vc.mips, vc.pes, vc.ram, vc.bw, vc.size) for i in range(profile.concurrency_units)]


def to_cloudlet(task: TaskDescriptor) -> Cloudlet:
    return Cloudlet(
        cloudlet_id=task.task_id,
        length=task.length,
        pes=task.pes,
        utilization=task.utilization,
        file_size=task.file_size,
        output_size=task.output_size,
    )


def to_record(cloudlet: Cloudlet) -> FinishedTaskRecord:
    if cloudlet.vm is None or cloudlet.exec_start_time is None or cloudlet.finish_time is None:
        raise ValueError(f"Cloudlet {cloudlet.cloudlet_id} has not finished yet")

    return FinishedTaskRecord(
        task_id=cloudlet.cloudlet_id,
        vm_id=cloudlet.vm.vm_id,
        length=cloudlet.length,
        processing_rate=float(cloudlet.vm.mips),
        exec_start_time=cloudlet.exec_start_time,
        finish_time=cloudlet.finish_time,
        total_execution_time=cloudlet.total_execution_time,
    )


def run_scenario(profile: ArchitectureProfile, config: Optional[ExperimentConfig] = None) -> ScenarioRun:
    """在一个全新的仿真实例中运行单个架构场景

    所有并发单元和任务一次性提交，仿真运行到事件队列中的任务全部完成为止。
    引擎抛出的异常不在此处处理。

    Args:
        profile (ArchitectureProfile): 架构配置
        config (ExperimentConfig | None): 实验配置，为 None 时使用默认配置

    Returns:
        ScenarioRun: 已完成任务记录、仿真结束时钟和资源池每秒价格
    """

    ec = config or ExperimentConfig()

    simulation = Simulation(ec.datacenter.scheduling_interval)
    datacenter = create_datacenter(simulation, ec)
    broker = Broker(simulation)

    vms = create_vms(profile, ec)
    cloudlets = [to_cloudlet(t) for t in generate_tasks(profile, ec.workload)]

    logger.info(
        "Running scenario %s: %d units, %d tasks of length %d",
        profile.name,
        len(vms),
        len(cloudlets),
        profile.task_length,
    )

    broker.submit_vms(vms)
    broker.submit_cloudlets(cloudlets)

    elapsed_time = simulation.start()

    finished = broker.finished_cloudlets
    records = tuple(to_record(c) for c in finished)

    for r in records:
        logger.debug(
            "Task %d on unit %d: start=%.4f finish=%.4f exec=%.4f",
            r.task_id,
            r.vm_id,
            r.exec_start_time,
            r.finish_time,
            r.total_execution_time,
        )

    if len(records) < len(cloudlets):
        logger.warning(
            "Scenario %s finished %d of %d submitted tasks", profile.name, len(records), len(cloudlets)
        )

    logger.info("Scenario %s finished at clock %.4f", profile.name, elapsed_time)

    return ScenarioRun(
        profile=profile,
        finished_records=records,
        elapsed_time=elapsed_time,
        cost_per_second=datacenter.characteristics.cost_per_second,
        submitted_count=len(cloudlets),
    )
