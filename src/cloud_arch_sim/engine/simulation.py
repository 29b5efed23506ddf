"""simulation.py

离散事件仿真入口

每个 `Simulation` 拥有独立的 `simpy.Environment`，即独立的仿真时钟和事件队列，
不同仿真之间不会共享任何可变状态。
"""

import logging
from typing import TYPE_CHECKING

import simpy
from simpy.core import Infinity

from .errors import SimulationError

if TYPE_CHECKING:
    from .broker import Broker
    from .datacenter import Datacenter

logger = logging.getLogger(__name__)


class Simulation:
    """离散事件仿真

    Args:
        scheduling_interval (float): 数据中心的调度周期，为 0 时不进行周期性调度
    """

    __slots__ = (
        "env",
        "scheduling_interval",
        "datacenters",
        "brokers",
        "_started",
        "_done",
    )

    def __init__(self, scheduling_interval: float = 0.0):
        if scheduling_interval < 0:
            raise ValueError(f"Scheduling interval must be non-negative, got {scheduling_interval}")

        self.env: simpy.Environment = simpy.Environment()
        self.scheduling_interval: float = scheduling_interval
        self.datacenters: list["Datacenter"] = []
        self.brokers: list["Broker"] = []

        self._started: bool = False
        self._done: simpy.Event = self.env.event()

    @property
    def clock(self) -> float:
        """当前仿真时间"""
        return float(self.env.now)

    @property
    def started(self) -> bool:
        return self._started

    def register_datacenter(self, datacenter: "Datacenter"):
        self.datacenters.append(datacenter)

    def register_broker(self, broker: "Broker"):
        self.brokers.append(broker)

    def start(self) -> float:
        """运行仿真直到所有已提交的云任务执行完成

        Returns:
            float: 仿真结束时的时钟
        """

        if self._started:
            raise SimulationError("Simulation has already been started")
        if not self.datacenters:
            raise SimulationError("Simulation has no datacenter")

        self._started = True

        for b in self.brokers:
            b.dispatch()

        self.notify_progress()

        if self.scheduling_interval > 0:
            self.env.process(self._scheduler_tick())

        # 逐个处理事件，进程内抛出的异常原样向上传播
        while not self._done.processed:
            if self.env.peek() == Infinity:
                unfinished = sum(len(b.cloudlets) - len(b.finished_cloudlets) for b in self.brokers)
                raise SimulationError(
                    f"Event queue drained before all cloudlets finished ({unfinished} unfinished)"
                )
            self.env.step()

        logger.debug("Simulation finished at clock %.4f", self.clock)
        return self.clock

    def notify_progress(self):
        """所有代理的云任务都完成时，触发仿真结束事件"""
        if self._started and not self._done.triggered and all(b.completed for b in self.brokers):
            self._done.succeed()

    def _scheduler_tick(self):
        # 所有虚拟机都空闲时停止，否则无法完成的云任务会让仿真永远运行下去
        while not self._done.triggered and self._any_vm_busy():
            yield self.env.timeout(self.scheduling_interval)
            for dc in self.datacenters:
                dc.update_processing()

    def _any_vm_busy(self) -> bool:
        return any(vm.busy for dc in self.datacenters for vm in dc.vms)
