"""profile.py

部署架构配置
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ArchitectureName = Literal["VM", "Container", "Serverless"]

ARCHITECTURE_ORDER: tuple[ArchitectureName, ...] = ("VM", "Container", "Serverless")

DEFAULT_BASE_LENGTH = 10000
SERVERLESS_BASE_LENGTH = 2000

DEFAULT_INVOCATION_COST = 0.00002
SERVERLESS_INVOCATION_COST = 0.0002

SERVERLESS_CPU_UTILIZATION = 0.2


class ArchitectureProfile(BaseModel):
    """部署架构配置

    架构之间的行为差异完全由以下字段决定，仿真驱动不针对具体架构做分支处理。
    """

    model_config = ConfigDict(frozen=True)

    name: ArchitectureName = Field(..., description="架构名称")
    concurrency_units: int = Field(..., ge=1, description="并发单元 (虚拟机/容器实例/函数执行槽) 数量")
    cost_factor: float = Field(..., gt=0, allow_inf_nan=False, description="任务长度缩放系数")
    serverless: bool = Field(False, description="是否为无服务器架构")

    @model_validator(mode="after")
    def validate_task_length(self) -> "ArchitectureProfile":
        # 截断后的任务长度必须在构造时就是正数，不能留到仿真运行中才发现
        if self.task_length < 1:
            raise ValueError(
                f"Cost factor {self.cost_factor} gives a non-positive task length "
                f"for base length {self.base_length}"
            )
        return self

    @property
    def base_length(self) -> int:
        """缩放前的任务指令数量"""
        return SERVERLESS_BASE_LENGTH if self.serverless else DEFAULT_BASE_LENGTH

    @property
    def task_length(self) -> int:
        """缩放后的任务指令数量 (截断为整数)"""
        return int(self.base_length * self.cost_factor)

    @property
    def utilization_fraction(self) -> float:
        """任务运行时占用的 CPU 比例：无服务器架构为间歇的部分占用，其余为持续的完全占用"""
        return SERVERLESS_CPU_UTILIZATION if self.serverless else 1.0

    @property
    def per_invocation_cost(self) -> float:
        """每个已完成任务的按次计费价格"""
        return SERVERLESS_INVOCATION_COST if self.serverless else DEFAULT_INVOCATION_COST


VM_PROFILE = ArchitectureProfile(name="VM", concurrency_units=4, cost_factor=1.0, serverless=False)
CONTAINER_PROFILE = ArchitectureProfile(name="Container", concurrency_units=2, cost_factor=0.8, serverless=False)
SERVERLESS_PROFILE = ArchitectureProfile(name="Serverless", concurrency_units=1, cost_factor=0.5, serverless=True)

DEFAULT_PROFILES: tuple[ArchitectureProfile, ...] = (VM_PROFILE, CONTAINER_PROFILE, SERVERLESS_PROFILE)
