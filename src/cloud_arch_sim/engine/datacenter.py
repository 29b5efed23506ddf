"""datacenter.py

主机与数据中心建模
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from .cloudlet import Cloudlet
from .errors import VmAllocationError
from .vm import Vm

if TYPE_CHECKING:
    from .simulation import Simulation


@dataclass(frozen=True, slots=True)
class DatacenterCharacteristics:
    """数据中心的计费标准

    Args:
        cost_per_second (float): 资源每秒的价格
        cost_per_mem (float): 每 MB 内存的价格
        cost_per_storage (float): 每 MB 存储的价格
        cost_per_bw (float): 每单位带宽的价格
    """

    cost_per_second: float = 0.0
    cost_per_mem: float = 0.0
    cost_per_storage: float = 0.0
    cost_per_bw: float = 0.0

    def __post_init__(self):
        for name in ("cost_per_second", "cost_per_mem", "cost_per_storage", "cost_per_bw"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative")


class Host:
    """物理主机模型

    Args:
        host_id (int): 主机ID
        pes (int): 处理单元数量
        pe_mips (int): 单个处理单元每秒可执行的指令数量 (百万条)
        ram (int): 内存大小 (MB)
        bw (int): 带宽
        storage (int): 存储大小 (MB)
    """

    __slots__ = (
        "host_id",
        "pes",
        "pe_mips",
        "ram",
        "bw",
        "storage",
        "_vms",
    )

    def __init__(self, host_id: int, pes: int, pe_mips: int, ram: int, bw: int, storage: int):
        if pes < 1:
            raise ValueError(f"Host PEs must be at least 1, got {pes}")
        if pe_mips <= 0 or ram <= 0 or bw <= 0 or storage <= 0:
            raise ValueError("Host MIPS, RAM, bandwidth and storage must be positive")

        self.host_id: int = host_id
        self.pes: int = pes
        self.pe_mips: int = pe_mips
        self.ram: int = ram
        self.bw: int = bw
        self.storage: int = storage

        self._vms: list[Vm] = []

    def __len__(self) -> int:
        return len(self._vms)

    def __iter__(self):
        return iter(self._vms)

    @property
    def free_pes(self) -> int:
        return self.pes - sum(vm.pes for vm in self._vms)

    @property
    def free_ram(self) -> int:
        return self.ram - sum(vm.ram for vm in self._vms)

    @property
    def free_bw(self) -> int:
        return self.bw - sum(vm.bw for vm in self._vms)

    @property
    def free_storage(self) -> int:
        return self.storage - sum(vm.size for vm in self._vms)

    def is_suitable_for(self, vm: Vm) -> bool:
        """主机剩余资源是否能够容纳指定虚拟机"""
        return (
            vm.mips <= self.pe_mips
            and vm.pes <= self.free_pes
            and vm.ram <= self.free_ram
            and vm.bw <= self.free_bw
            and vm.size <= self.free_storage
        )

    def place(self, vm: Vm):
        if not self.is_suitable_for(vm):
            raise VmAllocationError(f"Host {self.host_id} cannot accommodate VM {vm.vm_id}")
        self._vms.append(vm)


class Datacenter:
    """数据中心模型

    Args:
        simulation (Simulation): 数据中心所属的仿真
        hosts (list[Host]): 主机列表
        characteristics (DatacenterCharacteristics): 计费标准
    """

    __slots__ = (
        "simulation",
        "characteristics",
        "_hosts",
    )

    def __init__(self, simulation: "Simulation", hosts: list[Host], characteristics: DatacenterCharacteristics):
        if not hosts:
            raise ValueError("Datacenter requires at least one host")

        self.simulation: "Simulation" = simulation
        self.characteristics: DatacenterCharacteristics = characteristics
        self._hosts: tuple[Host, ...] = tuple(hosts)

        simulation.register_datacenter(self)

    def __len__(self) -> int:
        return len(self._hosts)

    def __getitem__(self, host_id: int) -> Host:
        return self._hosts[host_id]

    def __iter__(self):
        return iter(self._hosts)

    @property
    def vms(self) -> list[Vm]:
        return [vm for h in self._hosts for vm in h]

    def allocate_vm(self, vm: Vm, on_finish: Callable[[Cloudlet], None]) -> Host:
        """将虚拟机放置到剩余处理单元最多且能容纳它的主机上

        Args:
            vm (Vm): 待放置的虚拟机
            on_finish (Callable[[Cloudlet], None]): 虚拟机上云任务完成时的回调

        Returns:
            Host: 放置虚拟机的主机
        """

        candidates = [h for h in self._hosts if h.is_suitable_for(vm)]
        if not candidates:
            raise VmAllocationError(
                f"No suitable host for VM {vm.vm_id} (mips={vm.mips}, pes={vm.pes}, ram={vm.ram}, bw={vm.bw}, size={vm.size})"
            )

        host = max(candidates, key=lambda h: h.free_pes)
        host.place(vm)
        vm.create(self.simulation.env, host, on_finish)

        return host

    def update_processing(self):
        """调度周期到达时，更新数据中心内所有虚拟机上的云任务进度"""
        for vm in self.vms:
            vm.update_processing()
