"""utilization.py

云任务的资源利用率模型
"""


class UtilizationModel:
    """利用率模型基类

    利用率表示任务在运行时占用其所在虚拟机单个处理单元 (PE) 计算能力的比例。
    """

    __slots__ = ()

    def cpu_usage(self, time: float) -> float:
        """获得指定时间点任务的 CPU 利用率 (0, 1]"""
        raise NotImplementedError


class UtilizationModelFull(UtilizationModel):
    """任务始终占用 100% 的计算能力"""

    __slots__ = ()

    def cpu_usage(self, time: float) -> float:
        return 1.0

    def __eq__(self, other: object) -> bool:
        return isinstance(other, UtilizationModelFull)

    def __hash__(self) -> int:
        return hash(UtilizationModelFull)

    def __repr__(self) -> str:
        return "UtilizationModelFull()"


class UtilizationModelDynamic(UtilizationModel):
    """任务始终占用固定比例的计算能力

    Args:
        fraction (float): 占用比例，取值范围 (0, 1]
    """

    __slots__ = ("fraction",)

    def __init__(self, fraction: float):
        if not 0.0 < fraction <= 1.0:
            raise ValueError(f"Utilization fraction must be in (0, 1], got {fraction}")

        self.fraction: float = fraction

    def cpu_usage(self, time: float) -> float:
        return self.fraction

    def __eq__(self, other: object) -> bool:
        return isinstance(other, UtilizationModelDynamic) and other.fraction == self.fraction

    def __hash__(self) -> int:
        return hash((UtilizationModelDynamic, self.fraction))

    def __repr__(self) -> str:
        return f"UtilizationModelDynamic({self.fraction})"
