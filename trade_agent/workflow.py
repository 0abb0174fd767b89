"""工作流模块：固定顺序的买入→卖出流程

每一步都是 定位 → 点击/写值 → 随机等待。任何一步定位不到目标、或点击/写值返回
False，都会抛出 StepFault 并立即放弃本次尝试剩余的步骤。节点句柄只在产生它的
那一步内使用，等待之后总是重新定位。
"""

from typing import Awaitable, Callable, List, Optional, Tuple

from playwright.async_api import Error as PlaywrightError

from .config import DelayRange, TradeConfig
from .controller import click_failure_reason, set_value, simulate
from .dom import PageDocument, PageNode
from .errors import FailureReason, StepFault
from .memory import Memory
from .pacing import Pacer
from .perception import locate, locate_containing

BUY = "buy"
SELL = "sell"


class TradeWorkflow:
    """一次买卖尝试的步骤序列"""

    def __init__(self, document: PageDocument, config: TradeConfig, pacer: Pacer, memory: Memory):
        self.document = document
        self.config = config
        self.selectors = config.selectors
        self.pacer = pacer
        self.memory = memory

    def steps(self) -> List[Tuple[str, Callable[[str], Awaitable[None]]]]:
        return [
            ("select-buy-tab", self.select_buy_tab),
            ("enter-buy-amount", self.enter_buy_amount),
            ("configure-slippage(buy)", lambda step: self.configure_slippage(step, BUY)),
            ("confirm-slippage(buy)", lambda step: self.confirm(step, self.config.confirm_delay)),
            ("click-buy", self.click_buy),
            ("confirm-buy", lambda step: self.confirm(step, self.config.confirm_delay)),
            ("select-sell-tab", self.select_sell_tab),
            ("set-sell-to-full", self.set_sell_to_full),
            ("configure-slippage(sell)", lambda step: self.configure_slippage(step, SELL)),
            ("confirm-slippage(sell)", lambda step: self.confirm(step, self.config.confirm_delay)),
            ("click-sell", self.click_sell),
            ("confirm-sell", lambda step: self.confirm(step, self.config.final_delay)),
        ]

    async def run(self) -> None:
        """按顺序执行所有步骤，第一处失败即抛出 StepFault"""
        await self.log_panel_state()
        for name, action in self.steps():
            try:
                await action(name)
            except StepFault as fault:
                self.memory.record(name, False, str(fault))
                raise
            except PlaywrightError as e:
                self.memory.record(name, False, str(e))
                raise StepFault(name, FailureReason.DETACHED, str(e)) from e
            self.memory.record(name, True)

    async def log_panel_state(self):
        """打印金额输入框与滑块的当前状态"""
        for selector in (self.selectors.amount_input, self.selectors.slider):
            try:
                node = await locate(self.document, selector)
                if node is None:
                    print(f"⚠ {selector} 未找到")
                    continue
                print(f"{selector}: disabled={await node.is_disabled()} value={await node.value()!r}")
            except PlaywrightError as e:
                print(f"⚠ 读取 {selector} 失败: {e}")

    # ── 基础组合 ────────────────────────────────────

    async def _require(self, step: str, selector: str, text: Optional[str] = None) -> PageNode:
        node = await locate(self.document, selector, text)
        if node is None:
            target = f"{selector} text={text!r}" if text is not None else selector
            raise StepFault(step, FailureReason.LOCATE_ABSENT, target)
        return node

    async def _click(self, step: str, selector: str, text: Optional[str] = None, delay: Optional[DelayRange] = None):
        node = await self._require(step, selector, text)
        if not await simulate(node, label=text or selector):
            raise StepFault(step, await click_failure_reason(node), selector)
        await self.pacer.wait_range(delay or self.config.step_delay)

    async def _inject(self, step: str, selector: str, value: str, delay: DelayRange, **options):
        node = await self._require(step, selector)
        if not await set_value(node, value, label=selector, **options):
            raise StepFault(step, FailureReason.INJECTOR_UNAVAILABLE, selector)
        await self.pacer.wait_range(delay)

    # ── 步骤 ──────────────────────────────────────

    async def select_buy_tab(self, step: str):
        await self._click(step, self.selectors.buy_tab(), self.selectors.buy_tab_text)

    async def enter_buy_amount(self, step: str):
        await self._inject(step, self.selectors.amount_input, self.config.buy_amount, self.config.amount_delay)

    async def configure_slippage(self, step: str, side: str):
        """
        打开滑点设置，选择"自定义"并写入容差。

        找不到"自定义"选项不算故障：记录下来后跳过写值，继续后续步骤。
        """
        await self._click(step, self.selectors.slippage_settings)

        option = await locate_containing(self.document, self.selectors.slippage_options, self.selectors.custom_marker)
        if option is None:
            print(f"⚠ [{side}] 未找到包含“{self.selectors.custom_marker}”的选项，跳过滑点设置")
            self.memory.record(f"{step}:custom-option", False, FailureReason.LOCATE_ABSENT.value)
            await self.pacer.wait_range(self.config.step_delay)
            return

        if not await simulate(option, label=self.selectors.custom_marker):
            raise StepFault(step, await click_failure_reason(option), self.selectors.slippage_options)
        await self.pacer.wait_range(self.config.step_delay)

        await self._inject(step, self.selectors.slippage_input, self.config.slippage, self.config.step_delay)

    async def confirm(self, step: str, delay: DelayRange):
        await self._click(step, self.selectors.confirm_button, delay=delay)

    async def click_buy(self, step: str):
        await self._click(step, self.selectors.buy_button)

    async def select_sell_tab(self, step: str):
        await self._click(step, self.selectors.sell_tab(), self.selectors.sell_tab_text)

    async def set_sell_to_full(self, step: str):
        await self._inject(
            step,
            self.selectors.slider,
            self.config.sell_percent,
            self.config.confirm_delay,
            commit=True,
            rich_state=True,
        )

    async def click_sell(self, step: str):
        await self._click(step, self.selectors.sell_button)
