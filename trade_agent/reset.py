"""面板重置：每次尝试前把交易面板恢复到已知状态"""

from playwright.async_api import Error as PlaywrightError

from .config import TradeConfig
from .controller import click_failure_reason, simulate
from .dom import PageDocument
from .errors import FailureReason, ResetFault
from .pacing import Pacer
from .perception import exists, locate


async def reset_panel(document: PageDocument, config: TradeConfig, pacer: Pacer) -> None:
    """
    关闭残留的弹窗，切回买入标签，并确认金额输入框和滑块都在。

    没有弹窗时跳过取消点击，因此可以重复执行。买入标签或必需控件缺失时抛出 ResetFault。
    """
    selectors = config.selectors
    try:
        if await exists(document, selectors.modal_footer):
            cancel = await locate(document, selectors.cancel_button)
            if cancel is not None:
                if not await simulate(cancel, label="Cancel button"):
                    print("⚠ 取消按钮点击失败")
                await pacer.wait_range(config.reset_delay)

        tab = await locate(document, selectors.buy_tab(), selectors.buy_tab_text)
        if tab is None:
            raise ResetFault(FailureReason.LOCATE_ABSENT, f"buy tab {selectors.buy_tab_text!r}")
        if not await simulate(tab, label=selectors.buy_tab_text):
            raise ResetFault(await click_failure_reason(tab), f"buy tab {selectors.buy_tab_text!r}")
        await pacer.wait_range(config.reset_delay)

        for selector in (selectors.amount_input, selectors.slider):
            if await locate(document, selector) is None:
                raise ResetFault(FailureReason.LOCATE_ABSENT, selector)
    except PlaywrightError as e:
        raise ResetFault(FailureReason.DETACHED, str(e)) from e
