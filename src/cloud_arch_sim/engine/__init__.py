"""engine package

基于 simpy 的云计算离散事件仿真引擎
"""

from .broker import Broker
from .cloudlet import Cloudlet, CloudletStatus
from .datacenter import Datacenter, DatacenterCharacteristics, Host
from .errors import EngineError, SimulationError, VmAllocationError
from .simulation import Simulation
from .utilization import UtilizationModel, UtilizationModelDynamic, UtilizationModelFull
from .vm import Vm

__all__ = [
    "Broker",
    "Cloudlet",
    "CloudletStatus",
    "Datacenter",
    "DatacenterCharacteristics",
    "EngineError",
    "Host",
    "Simulation",
    "SimulationError",
    "UtilizationModel",
    "UtilizationModelDynamic",
    "UtilizationModelFull",
    "Vm",
    "VmAllocationError",
]
