"""errors.py

仿真引擎异常定义
"""


class EngineError(Exception):
    """仿真引擎异常基类"""


class VmAllocationError(EngineError):
    """数据中心中没有能够容纳虚拟机的主机"""


class SimulationError(EngineError):
    """仿真运行过程中的异常 (重复启动、事件队列提前耗尽等)"""
