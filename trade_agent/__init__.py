"""买卖循环自动化包

包含各个模块：
- models: 数据模型
- errors: 故障类型
- config: 运行配置
- dom: Playwright 文档树适配
- perception: 元素定位
- controller: 合成点击与写值
- pacing: 随机等待
- memory: 单次尝试的步骤记录
- workflow: 买卖步骤序列
- reset: 面板重置
- core: 迭代控制器
- session: 浏览器会话
"""

from .models import AttemptResult, BoundingBox, InteractionEvent, LoopTally, StepOutcome
from .errors import AgentFault, FailureReason, ResetFault, StepFault
from .config import DelayRange, Selectors, TradeConfig, load_config
from .dom import PageDocument, PageNode
from .perception import exists, locate, locate_containing
from .controller import set_value, simulate
from .pacing import Pacer
from .memory import Memory
from .workflow import TradeWorkflow
from .reset import reset_panel
from .core import TradeLoop
from .session import open_trade_page

__all__ = [
    "AttemptResult",
    "BoundingBox",
    "InteractionEvent",
    "LoopTally",
    "StepOutcome",
    "AgentFault",
    "FailureReason",
    "ResetFault",
    "StepFault",
    "DelayRange",
    "Selectors",
    "TradeConfig",
    "load_config",
    "PageDocument",
    "PageNode",
    "exists",
    "locate",
    "locate_containing",
    "set_value",
    "simulate",
    "Pacer",
    "Memory",
    "TradeWorkflow",
    "reset_panel",
    "TradeLoop",
    "open_trade_page",
]
