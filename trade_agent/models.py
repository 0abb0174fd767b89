"""数据模型定义"""

from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class BoundingBox:
    """元素的几何信息（视口坐标）"""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class InteractionEvent:
    """一次合成事件的不可变描述"""
    kind: str  # mousedown|click|mouseup|input|change
    target_ref: str
    bubbles: bool = True
    cancelable: bool = True
    coordinates: Optional[Tuple[float, float]] = None

    def init_dict(self) -> Dict:
        """转换为 dispatchEvent 使用的 eventInit"""
        init = {"bubbles": self.bubbles, "cancelable": self.cancelable}
        if self.coordinates is not None:
            init["clientX"], init["clientY"] = self.coordinates
        return init


@dataclass
class StepOutcome:
    """单个步骤的执行结果"""
    step_name: str
    success: bool
    error_detail: Optional[str] = None


@dataclass
class AttemptResult:
    """一次完整买卖尝试的结果"""
    iteration: int
    outcomes: List[StepOutcome] = field(default_factory=list)
    success: bool = False
    fault: Optional[str] = None


@dataclass(frozen=True)
class LoopTally:
    """单次循环调用的计数；只由迭代控制器推进"""
    attempted: int = 0
    succeeded: int = 0
    failed: int = 0

    def record(self, success: bool) -> "LoopTally":
        if success:
            return replace(self, attempted=self.attempted + 1, succeeded=self.succeeded + 1)
        return replace(self, attempted=self.attempted + 1, failed=self.failed + 1)

    @property
    def total(self) -> int:
        return self.succeeded + self.failed

    def summary(self) -> Dict[str, int]:
        return {"succeeded": self.succeeded, "failed": self.failed, "total": self.total}
