"""感知模块：从实时文档树中定位控件"""

from typing import Optional

from .dom import PageDocument, PageNode


async def locate(document: PageDocument, selector: str, text: Optional[str] = None) -> Optional[PageNode]:
    """
    按结构选择器取候选集，再按去首尾空白后的文本精确过滤。

    过滤后恰好剩一个节点时返回它；零个或多个都返回 None（不是错误）。
    不做重试，重试策略由调用方决定。
    """
    candidates = await document.query_all(selector)
    if text is not None:
        candidates = [node for node in candidates if (await node.text()).strip() == text]
    if len(candidates) != 1:
        return None
    return candidates[0]


async def locate_containing(document: PageDocument, selector: str, marker: str) -> Optional[PageNode]:
    """返回第一个文本包含 marker 的节点"""
    for node in await document.query_all(selector):
        if marker in await node.text():
            return node
    return None


async def exists(document: PageDocument, selector: str) -> bool:
    return bool(await document.query_all(selector))
