"""vm.py

虚拟机及其分时云任务调度器建模
"""

from typing import TYPE_CHECKING, Callable, Optional

import simpy

from .cloudlet import Cloudlet

if TYPE_CHECKING:
    from .datacenter import Host

# 剩余指令数量小于该值时认为云任务已经完成，用于吸收浮点误差
_FINISH_EPSILON = 1e-6


class Vm:
    """虚拟机模型

    虚拟机上的云任务使用分时方式共享计算能力：
    每个云任务申请 `mips * pes * cpu_usage` 的计算能力；
    当申请总量超过虚拟机的计算能力 `mips * pes` 时，按比例缩减每个云任务分到的计算能力。

    Args:
        vm_id (int): 虚拟机ID
        mips (int): 单个处理单元每秒可执行的指令数量 (百万条)
        pes (int): 处理单元数量
        ram (int): 内存大小 (MB)
        bw (int): 带宽
        size (int): 存储大小 (MB)
    """

    __slots__ = (
        "vm_id",
        "mips",
        "pes",
        "ram",
        "bw",
        "size",
        "host",
        "_env",
        "_on_finish",
        "_running",
        "_last_update",
        "_process",
    )

    def __init__(self, vm_id: int, mips: int, pes: int, ram: int, bw: int, size: int):
        if mips <= 0:
            raise ValueError(f"VM MIPS must be positive, got {mips}")
        if pes < 1:
            raise ValueError(f"VM PEs must be at least 1, got {pes}")
        if ram <= 0 or bw <= 0 or size <= 0:
            raise ValueError("VM RAM, bandwidth and storage must be positive")

        self.vm_id: int = vm_id
        self.mips: int = mips
        self.pes: int = pes
        self.ram: int = ram
        self.bw: int = bw
        self.size: int = size

        self.host: Optional["Host"] = None
        self._env: Optional[simpy.Environment] = None
        self._on_finish: Optional[Callable[[Cloudlet], None]] = None
        self._running: list[Cloudlet] = []
        self._last_update: float = 0.0
        self._process: Optional[simpy.Process] = None

    def __repr__(self) -> str:
        return f"Vm(vm_id={self.vm_id}, mips={self.mips}, pes={self.pes})"

    @property
    def total_mips(self) -> int:
        """虚拟机的总计算能力"""
        return self.mips * self.pes

    @property
    def created(self) -> bool:
        """虚拟机是否已经放置到主机上"""
        return self.host is not None

    @property
    def busy(self) -> bool:
        return bool(self._running)

    @property
    def running_cloudlets(self) -> tuple[Cloudlet, ...]:
        return tuple(self._running)

    def create(self, env: simpy.Environment, host: "Host", on_finish: Callable[[Cloudlet], None]):
        """将虚拟机放置到主机上，并绑定仿真环境

        Args:
            env (simpy.Environment): 虚拟机所属仿真的事件环境
            host (Host): 放置虚拟机的主机
            on_finish (Callable[[Cloudlet], None]): 云任务完成时的回调
        """

        if self.created:
            raise RuntimeError(f"VM {self.vm_id} has already been created")

        self.host = host
        self._env = env
        self._on_finish = on_finish
        self._last_update = env.now

    def submit(self, cloudlet: Cloudlet):
        """在虚拟机上开始执行云任务"""
        if self._env is None:
            raise RuntimeError(f"VM {self.vm_id} must be created before running cloudlets")
        if cloudlet.pes > self.pes:
            raise ValueError(f"Cloudlet {cloudlet.cloudlet_id} requires {cloudlet.pes} PEs, VM {self.vm_id} has {self.pes}")

        # 先结算已有云任务到当前时刻的进度，再加入新云任务
        self._advance()
        cloudlet.run(self._env.now, self)
        self._running.append(cloudlet)
        self._reallocate()
        self._reschedule()

    def update_processing(self):
        """将所有运行中的云任务推进到当前时刻，完成已执行完毕的云任务，并重新分配计算能力"""
        if self._env is None:
            return

        self._advance()

        now = self._env.now
        finished = [c for c in self._running if c.remaining_length <= _FINISH_EPSILON]
        if finished:
            self._running = [c for c in self._running if c.remaining_length > _FINISH_EPSILON]
            for c in finished:
                c.finish(now)
                if self._on_finish is not None:
                    self._on_finish(c)

        self._reallocate()
        self._reschedule()

    def _advance(self):
        """按照上次分配的计算能力，扣除从上次更新到当前时刻已执行的指令数量"""
        assert self._env is not None
        now = self._env.now
        elapsed = now - self._last_update
        if elapsed > 0:
            for c in self._running:
                c.remaining_length -= c.allocated_mips * elapsed
        self._last_update = now

    def _reallocate(self):
        """分时分配计算能力"""
        if not self._running:
            return

        assert self._env is not None
        now = self._env.now

        requested = [self.mips * c.pes * c.utilization.cpu_usage(now) for c in self._running]
        total_requested = sum(requested)

        if total_requested <= self.total_mips:
            scale = 1.0
        else:
            scale = self.total_mips / total_requested

        for c, r in zip(self._running, requested):
            c.allocated_mips = r * scale

    def _reschedule(self):
        """取消等待中的完成事件，并按照最新的计算能力分配重新安排下一个完成事件"""
        assert self._env is not None

        if self._process is not None and self._process.is_alive and self._process is not self._env.active_process:
            self._process.interrupt("reschedule")
        self._process = None

        if not self._running:
            return

        delay = min(max(c.remaining_length, 0.0) / c.allocated_mips for c in self._running)
        self._process = self._env.process(self._wait_next_finish(delay))

    def _wait_next_finish(self, delay: float):
        assert self._env is not None
        try:
            yield self._env.timeout(delay)
        except simpy.Interrupt:
            return

        self.update_processing()
