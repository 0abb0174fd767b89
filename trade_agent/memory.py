"""记忆模块：保存单次尝试中每一步的结果"""

from typing import List, Optional

from .models import AttemptResult, StepOutcome


class Memory:
    """记忆模块：按顺序记录一次尝试内的步骤结果，不跨尝试保留"""

    def __init__(self, iteration: int):
        self.iteration = iteration
        self.history: List[StepOutcome] = []

    def record(self, step_name: str, success: bool, error_detail: Optional[str] = None):
        """记录单步结果"""
        self.history.append(StepOutcome(step_name=step_name, success=success, error_detail=error_detail))

    def step_names(self) -> List[str]:
        return [o.step_name for o in self.history]

    def to_result(self, success: bool, fault: Optional[str] = None) -> AttemptResult:
        return AttemptResult(iteration=self.iteration, outcomes=list(self.history), success=success, fault=fault)

    def format_history(self, last_n: int = 5) -> str:
        """格式化最近几步的记录"""
        if not self.history:
            return "(无历史)"

        lines = []
        for rec in self.history[-last_n:]:
            status = "success" if rec.success else "failed"
            detail_str = f" ({rec.error_detail})" if rec.error_detail else ""
            lines.append(f"{rec.step_name} → {status}{detail_str}")

        return "\n".join(lines)
