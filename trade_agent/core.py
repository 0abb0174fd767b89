"""交易循环核心类"""

from typing import Optional

from .config import TradeConfig
from .dom import PageDocument
from .errors import ResetFault, StepFault
from .memory import Memory
from .models import AttemptResult, LoopTally
from .pacing import Pacer
from .reset import reset_panel
from .workflow import TradeWorkflow


class TradeLoop:
    """迭代控制器：依次执行 N 次 重置 → 买卖流程，每次尝试的故障互不影响"""

    def __init__(self, document: PageDocument, config: TradeConfig, pacer: Optional[Pacer] = None):
        self.document = document
        self.config = config
        self.pacer = pacer or Pacer()

    async def run_iteration(self, iteration: int) -> AttemptResult:
        """执行一次尝试；ResetFault / StepFault 被记录为失败结果而不是抛出"""
        memory = Memory(iteration)
        print(f"Starting trade iteration {iteration}")
        try:
            await reset_panel(self.document, self.config, self.pacer)
        except ResetFault as fault:
            memory.record("reset-panel", False, str(fault))
            return memory.to_result(False, str(fault))
        memory.record("reset-panel", True)

        try:
            await TradeWorkflow(self.document, self.config, self.pacer, memory).run()
        except StepFault as fault:
            print(f"最近步骤:\n{memory.format_history()}")
            return memory.to_result(False, str(fault))
        return memory.to_result(True)

    async def run(self, tally: Optional[LoopTally] = None) -> LoopTally:
        """
        主循环：执行 config.iterations 次尝试，返回最终计数。

        传入的 tally 作为起点，不会被修改。
        """
        tally = tally or LoopTally()
        total = self.config.iterations

        for i in range(1, total + 1):
            print(f"\n{'='*60}")
            print(f"=== Starting iteration {i} of {total} ===")
            print(f"{'='*60}")

            result = await self.run_iteration(i)
            tally = tally.record(result.success)

            if result.success:
                print(f"✓ === Iteration {i} succeeded ===")
            else:
                print(f"❌ === Iteration {i} failed: {result.fault} ===")
                await self.pacer.wait_range(self.config.failure_delay)

            # 每次迭代后额外等待，确保页面状态稳定
            await self.pacer.wait_range(self.config.iteration_delay)

        print(
            f"\n✓ Trade loop completed: {tally.succeeded} successful, "
            f"{tally.failed} failed, {tally.total} total"
        )
        return tally
