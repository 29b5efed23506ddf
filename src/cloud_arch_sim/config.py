"""config.py

实验配置模型
"""

import yaml
from pydantic import BaseModel, Field, model_validator

from .profile import ARCHITECTURE_ORDER, DEFAULT_PROFILES, ArchitectureProfile

HOURS = 24
BASE_LOAD = 5
PEAK_LOAD = 20
PEAK_PERIOD = 6


class HostConfig(BaseModel):
    count: int = Field(1, gt=0, description="主机数量")
    pes: int = Field(8, gt=0, description="处理单元数量")
    pe_mips: int = Field(2000, gt=0, description="单个处理单元的计算速度 (MIPS)")
    ram: int = Field(16384, gt=0, description="内存大小 (MB)")
    bw: int = Field(100000, gt=0, description="带宽")
    storage: int = Field(1000000, gt=0, description="存储大小 (MB)")


class DatacenterConfig(BaseModel):
    scheduling_interval: float = Field(10.0, ge=0, description="调度周期 (秒)")
    cost_per_second: float = Field(0.1, ge=0, description="资源每秒的价格")
    cost_per_mem: float = Field(0.05, ge=0, description="每 MB 内存的价格")
    cost_per_storage: float = Field(0.001, ge=0, description="每 MB 存储的价格")
    cost_per_bw: float = Field(0.01, ge=0, description="每单位带宽的价格")
    hosts: list[HostConfig] = Field(default_factory=lambda: [HostConfig()], min_length=1, description="主机配置列表")


class VmConfig(BaseModel):
    mips: int = Field(1000, gt=0, description="单个处理单元的计算速度 (MIPS)")
    pes: int = Field(2, gt=0, description="处理单元数量")
    ram: int = Field(2048, gt=0, description="内存大小 (MB)")
    bw: int = Field(1000, gt=0, description="带宽")
    size: int = Field(10000, gt=0, description="存储大小 (MB)")


class WorkloadConfig(BaseModel):
    hours: int = Field(HOURS, gt=0, description="工作负载覆盖的小时数")
    base_load: int = Field(BASE_LOAD, ge=0, description="平峰时段每小时的用户数")
    peak_load: int = Field(PEAK_LOAD, ge=0, description="高峰时段每小时的用户数")
    peak_period: int = Field(PEAK_PERIOD, gt=0, description="高峰出现的周期 (小时)")
    file_size: int = Field(300, gt=0, description="每个任务的输入数据大小")
    output_size: int = Field(300, gt=0, description="每个任务的输出数据大小")


class ExperimentConfig(BaseModel):
    datacenter: DatacenterConfig = Field(default_factory=DatacenterConfig, description="数据中心配置")
    vm: VmConfig = Field(default_factory=VmConfig, description="并发单元规格")
    workload: WorkloadConfig = Field(default_factory=WorkloadConfig, description="工作负载配置")
    profiles: list[ArchitectureProfile] = Field(
        default_factory=lambda: list(DEFAULT_PROFILES), description="按比较顺序排列的架构配置列表"
    )

    @classmethod
    def from_yaml(cls, path: str) -> "ExperimentConfig":
        """从 YAML 文件加载实验配置"""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls(**(data or {}))

    @model_validator(mode="after")
    def validate_profiles(self) -> "ExperimentConfig":
        names = [p.name for p in self.profiles]
        unique_names = set(names)

        if len(names) != len(unique_names):
            duplicates = sorted(set(n for n in names if names.count(n) > 1))
            raise ValueError(f"Duplicate architecture profile names: {', '.join(duplicates)}")

        if tuple(names) != ARCHITECTURE_ORDER:
            raise ValueError(f"Architecture profiles must be exactly {', '.join(ARCHITECTURE_ORDER)} in this order")

        return self
