"""运行配置：选择器、交易参数与延迟区间

所有配置在一次运行内不可变。load_config() 先加载 .env 文件，再从环境变量读取，
未设置的项使用默认值。
"""

import os
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import NamedTuple, Optional

from dotenv import find_dotenv, load_dotenv


class DelayRange(NamedTuple):
    """闭区间 [min_ms, max_ms] 的随机等待"""
    min_ms: int
    max_ms: int


@dataclass(frozen=True)
class Selectors:
    """交易面板上各个控件的 CSS 选择器与文本"""
    tab: str = 'div[role="tab"][id="{tab_id}"].bn-tab.bn-tab__buySell'
    buy_tab_id: str = "bn-tab-0"
    buy_tab_text: str = "买入"
    sell_tab_id: str = "bn-tab-1"
    sell_tab_text: str = "卖出"
    amount_input: str = "#fromCoinAmount"
    slider: str = 'input[role="slider"]'
    slippage_settings: str = "div.t-subtitle3.text-PrimaryText div.bn-flex.cursor-pointer"
    slippage_options: str = "div.t-subtitle1.text-PrimaryText"
    custom_marker: str = "自定义"
    slippage_input: str = "#customize-slippage"
    modal_footer: str = ".bn-modal-footer"
    confirm_button: str = ".bn-modal-footer .bn-button.bn-button__primary"
    cancel_button: str = ".bn-modal-footer .bn-button:not(.bn-button__primary)"
    buy_button: str = ".bn-button.bn-button__buy"
    sell_button: str = ".bn-button.bn-button__sell"

    def buy_tab(self) -> str:
        return self.tab.format(tab_id=self.buy_tab_id)

    def sell_tab(self) -> str:
        return self.tab.format(tab_id=self.sell_tab_id)


@dataclass(frozen=True)
class TradeConfig:
    """一次运行的完整配置"""
    selectors: Selectors = field(default_factory=Selectors)
    iterations: int = 3
    buy_amount: str = "8"
    slippage: str = "0.1"
    sell_percent: str = "100"
    step_delay: DelayRange = DelayRange(500, 1000)
    amount_delay: DelayRange = DelayRange(2000, 4000)
    confirm_delay: DelayRange = DelayRange(3000, 5000)
    final_delay: DelayRange = DelayRange(1000, 2000)
    reset_delay: DelayRange = DelayRange(500, 1000)
    failure_delay: DelayRange = DelayRange(1000, 2000)
    iteration_delay: DelayRange = DelayRange(3000, 7000)
    url: Optional[str] = None
    cdp_url: Optional[str] = None
    profile_dir: str = ".trade-profile"
    headless: bool = False


def parse_delay(raw: str, name: str) -> DelayRange:
    """解析 "min,max" 形式的毫秒区间"""
    parts = [p.strip() for p in raw.split(",")]
    if len(parts) != 2:
        raise ValueError(f"{name} 必须是 'min,max' 格式，实际为 {raw!r}")
    try:
        low, high = int(parts[0]), int(parts[1])
    except ValueError:
        raise ValueError(f"{name} 必须是整数毫秒，实际为 {raw!r}") from None
    if low < 0 or high < low:
        raise ValueError(f"{name} 要求 0 <= min <= max，实际为 {raw!r}")
    return DelayRange(low, high)


def _parse_positive_number(raw: str, name: str) -> str:
    try:
        number = Decimal(raw)
    except InvalidOperation:
        raise ValueError(f"{name} 必须是数字，实际为 {raw!r}") from None
    if not number.is_finite() or number <= 0:
        raise ValueError(f"{name} 必须大于 0，实际为 {raw!r}")
    return raw.strip()


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_config(env_file: Optional[str] = None) -> TradeConfig:
    """从 .env 与环境变量构造 TradeConfig，非法取值抛出 ValueError"""
    load_dotenv(env_file or find_dotenv(usecwd=True))
    defaults = TradeConfig()

    raw_iterations = os.getenv("TRADE_ITERATIONS", str(defaults.iterations))
    try:
        iterations = int(raw_iterations)
    except ValueError:
        raise ValueError(f"TRADE_ITERATIONS 必须是整数，实际为 {raw_iterations!r}") from None
    if iterations < 0:
        raise ValueError(f"TRADE_ITERATIONS 不能为负数，实际为 {iterations}")

    step_delay = defaults.step_delay
    if os.getenv("TRADE_STEP_DELAY"):
        step_delay = parse_delay(os.environ["TRADE_STEP_DELAY"], "TRADE_STEP_DELAY")
    iteration_delay = defaults.iteration_delay
    if os.getenv("TRADE_ITERATION_DELAY"):
        iteration_delay = parse_delay(os.environ["TRADE_ITERATION_DELAY"], "TRADE_ITERATION_DELAY")

    return TradeConfig(
        iterations=iterations,
        buy_amount=_parse_positive_number(os.getenv("TRADE_BUY_AMOUNT", defaults.buy_amount), "TRADE_BUY_AMOUNT"),
        slippage=_parse_positive_number(os.getenv("TRADE_SLIPPAGE", defaults.slippage), "TRADE_SLIPPAGE"),
        sell_percent=_parse_positive_number(os.getenv("TRADE_SELL_PERCENT", defaults.sell_percent), "TRADE_SELL_PERCENT"),
        step_delay=step_delay,
        iteration_delay=iteration_delay,
        url=os.getenv("TRADE_URL") or None,
        cdp_url=os.getenv("TRADE_CDP_URL") or None,
        profile_dir=os.getenv("TRADE_PROFILE_DIR", defaults.profile_dir),
        headless=_parse_bool(os.getenv("TRADE_HEADLESS", "false")),
    )
