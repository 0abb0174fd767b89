"""
买卖循环入口 - 基于 Playwright 的网页交易面板自动化

在已登录的交易页面上循环执行 "重置面板 → 买入 → 卖出"，每次尝试的失败互不影响，
结束后打印成功/失败计数。

依赖安装：
    pip install -e .
    playwright install chromium

运行示例：
    # 附加到以 --remote-debugging-port=9222 启动的浏览器
    TRADE_CDP_URL=http://localhost:9222 TRADE_URL=<交易页面地址> python run_trade.py
"""

import asyncio
import sys
from typing import Dict, Optional

from playwright.async_api import Error as PlaywrightError

from trade_agent import PageDocument, TradeConfig, TradeLoop, load_config, open_trade_page


async def run(config: TradeConfig) -> Dict[str, int]:
    """打开页面并执行交易循环，返回 {succeeded, failed, total}"""
    async with open_trade_page(config) as page:
        tally = await TradeLoop(PageDocument(page), config).run()
    return tally.summary()


def main(env_file: Optional[str] = None) -> int:
    try:
        config = load_config(env_file)
    except ValueError as e:
        print(f"❌ 配置错误: {e}")
        return 1

    try:
        summary = asyncio.run(run(config))
    except PlaywrightError as e:
        print(f"❌ 浏览器会话失败: {e}")
        return 1

    print(f"Summary: {summary}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
