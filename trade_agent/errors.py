"""异常定义：步骤故障与重置故障"""

from enum import Enum
from typing import Optional


class FailureReason(str, Enum):
    """原语层的失败原因"""
    LOCATE_ABSENT = "locate_absent"  # 未找到或匹配不唯一
    GATE_BLOCKED = "gate_blocked"  # 目标被禁用，拒绝交互
    INJECTOR_UNAVAILABLE = "injector_unavailable"  # 无法取得原生 value setter
    DETACHED = "detached"  # 元素在操作中途被重新渲染


class AgentFault(Exception):
    """中止当前尝试的控制流信号"""

    def __init__(self, reason: FailureReason, detail: Optional[str] = None):
        self.reason = reason
        self.detail = detail
        super().__init__(self._describe())

    def _describe(self) -> str:
        if self.detail:
            return f"{self.reason.value}: {self.detail}"
        return self.reason.value


class StepFault(AgentFault):
    """工作流某一步无法完成"""

    def __init__(self, step_name: str, reason: FailureReason, detail: Optional[str] = None):
        self.step_name = step_name
        super().__init__(reason, detail)

    def _describe(self) -> str:
        return f"step '{self.step_name}' failed ({super()._describe()})"


class ResetFault(AgentFault):
    """面板重置的前置条件未满足"""

    def _describe(self) -> str:
        return f"panel reset failed ({super()._describe()})"
