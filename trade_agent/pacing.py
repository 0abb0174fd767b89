"""节奏模块：随机等待，使自动化节奏跟随页面反应速度"""

import asyncio
import random
from typing import Awaitable, Callable, Optional

from .config import DelayRange


class Pacer:
    """在闭区间内均匀采样整数毫秒并挂起当前流程"""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.rng = rng or random.Random()
        self.sleep = sleep

    async def wait(self, min_ms: int, max_ms: int) -> int:
        low, high = sorted((max(0, min_ms), max(0, max_ms)))
        ms = self.rng.randint(low, high)
        print(f"Waiting for {ms}ms")
        await self.sleep(ms / 1000)
        return ms

    async def wait_range(self, delay: DelayRange) -> int:
        return await self.wait(delay.min_ms, delay.max_ms)
