"""broker.py

代理：代表用户向数据中心提交虚拟机和云任务
"""

import logging
from typing import TYPE_CHECKING

from .cloudlet import Cloudlet
from .errors import SimulationError, VmAllocationError
from .vm import Vm

if TYPE_CHECKING:
    from .simulation import Simulation

logger = logging.getLogger(__name__)


class Broker:
    """代理模型

    虚拟机按提交顺序放置到数据中心；云任务按提交顺序轮询 (round-robin) 绑定到虚拟机。

    Args:
        simulation (Simulation): 代理所属的仿真
    """

    __slots__ = (
        "simulation",
        "_vms",
        "_cloudlets",
        "_finished",
    )

    def __init__(self, simulation: "Simulation"):
        self.simulation: "Simulation" = simulation
        self._vms: list[Vm] = []
        self._cloudlets: list[Cloudlet] = []
        self._finished: list[Cloudlet] = []

        simulation.register_broker(self)

    def submit_vms(self, vms: list[Vm]):
        """提交虚拟机列表"""
        if self.simulation.started:
            raise SimulationError("Cannot submit VMs after the simulation has started")
        self._vms.extend(vms)

    def submit_cloudlets(self, cloudlets: list[Cloudlet]):
        """提交云任务列表"""
        if self.simulation.started:
            raise SimulationError("Cannot submit cloudlets after the simulation has started")

        now = self.simulation.clock
        for c in cloudlets:
            c.submit(now)
        self._cloudlets.extend(cloudlets)

    @property
    def vms(self) -> tuple[Vm, ...]:
        return tuple(self._vms)

    @property
    def cloudlets(self) -> tuple[Cloudlet, ...]:
        return tuple(self._cloudlets)

    @property
    def finished_cloudlets(self) -> tuple[Cloudlet, ...]:
        """按完成顺序排列的已完成云任务"""
        return tuple(self._finished)

    @property
    def completed(self) -> bool:
        return len(self._finished) == len(self._cloudlets)

    def dispatch(self):
        """放置所有虚拟机，并将云任务分发到虚拟机上执行"""
        if self._cloudlets and not self._vms:
            raise SimulationError("Cloudlets were submitted but there is no VM to run them")

        for vm in self._vms:
            for dc in self.simulation.datacenters:
                try:
                    host = dc.allocate_vm(vm, self._on_cloudlet_finish)
                except VmAllocationError:
                    continue
                logger.debug("VM %d placed on host %d", vm.vm_id, host.host_id)
                break
            else:
                raise VmAllocationError(f"No datacenter can accommodate VM {vm.vm_id}")

        for i, c in enumerate(self._cloudlets):
            self._vms[i % len(self._vms)].submit(c)

    def _on_cloudlet_finish(self, cloudlet: Cloudlet):
        self._finished.append(cloudlet)
        self.simulation.notify_progress()
