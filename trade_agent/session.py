"""浏览器会话：附加到已登录的浏览器，或用持久化 profile 启动 Chromium"""

from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

from playwright.async_api import Browser, Page, async_playwright

from .config import TradeConfig


async def attach_page(browser: Browser, url: Optional[str]) -> Page:
    """复用 URL 以 url 开头的标签页；没有匹配时在第一个标签页（或新标签页）打开 url"""
    pages = [page for context in browser.contexts for page in context.pages]
    if url:
        for page in pages:
            if page.url.startswith(url):
                return page
    if pages:
        page = pages[0]
    else:
        context = browser.contexts[0] if browser.contexts else await browser.new_context()
        page = await context.new_page()
    if url:
        await page.goto(url)
    return page


@asynccontextmanager
async def open_trade_page(config: TradeConfig) -> AsyncIterator[Page]:
    """
    打开交易页面并在退出时释放资源。

    配置了 cdp_url 时通过 CDP 附加到正在运行的浏览器（见 attach_page），附加的浏览器
    不会被关闭。否则在 profile_dir 上启动持久化上下文，保留登录状态。
    """
    async with async_playwright() as p:
        if config.cdp_url:
            browser = await p.chromium.connect_over_cdp(config.cdp_url)
            page = await attach_page(browser, config.url)
            print(f"✓ 已附加到 {config.cdp_url}: {page.url}")
            yield page
            return

        profile_path = Path(config.profile_dir)
        profile_path.mkdir(parents=True, exist_ok=True)
        context = await p.chromium.launch_persistent_context(str(profile_path), headless=config.headless)
        try:
            page = context.pages[0] if context.pages else await context.new_page()
            if config.url:
                await page.goto(config.url, wait_until="load")
            print(f"✓ 已打开 {page.url}")
            yield page
        finally:
            await context.close()
