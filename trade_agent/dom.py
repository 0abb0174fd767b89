"""文档树适配层：把 Playwright 的 Page / Locator 包装成核心模块使用的接口

核心模块只依赖下面这些异步方法，测试中可以用任意实现了同名方法的对象替换：
- Document.query_all(selector)
- Node.text / get_attribute / set_attribute / bounding_box
- Node.dispatch / focus / blur
- Node.is_disabled / read_gate / set_gate / write_native_value

节点由 page.locator(selector).nth(i) 表示，每次调用时重新解析，不在浏览器端保留句柄。
"""

from typing import List, Optional, Tuple

from playwright.async_api import Locator, Page

from .models import BoundingBox, InteractionEvent

# 单次节点操作的等待上限（毫秒）；节点消失时尽快失败，而不是等默认的 30 秒
NODE_TIMEOUT_MS = 2000

# 从实例的原型链（跳过实例自身）中找到第一个带 setter 的 value 访问器，
# 绕过 React 等框架安装在实例上的拦截器。
_NATIVE_VALUE_SETTER_JS = """
(el, value) => {
    let proto = Object.getPrototypeOf(el);
    while (proto) {
        const descriptor = Object.getOwnPropertyDescriptor(proto, 'value');
        if (descriptor && typeof descriptor.set === 'function') {
            descriptor.set.call(el, value);
            return true;
        }
        proto = Object.getPrototypeOf(proto);
    }
    return false;
}
"""

_READ_GATE_JS = "(el) => [!!el.disabled, !!el.readOnly]"

_SET_GATE_JS = """
(el, [disabled, readOnly]) => {
    if ('disabled' in el) el.disabled = disabled;
    if ('readOnly' in el) el.readOnly = readOnly;
}
"""


class PageNode:
    """文档树中单个节点的临时引用，页面重新渲染后即失效"""

    def __init__(self, locator: Locator, ref: str):
        self.locator = locator
        self.ref = ref

    def __repr__(self) -> str:
        return f"<PageNode {self.ref}>"

    async def _evaluate(self, expression: str, arg=None):
        return await self.locator.evaluate(expression, arg, timeout=NODE_TIMEOUT_MS)

    async def text(self) -> str:
        return await self.locator.text_content(timeout=NODE_TIMEOUT_MS) or ""

    async def get_attribute(self, name: str) -> Optional[str]:
        return await self.locator.get_attribute(name, timeout=NODE_TIMEOUT_MS)

    async def set_attribute(self, name: str, value: str) -> None:
        await self._evaluate("(el, [n, v]) => el.setAttribute(n, v)", [name, value])

    async def bounding_box(self) -> Optional[BoundingBox]:
        box = await self.locator.bounding_box(timeout=NODE_TIMEOUT_MS)
        if not box:
            return None
        return BoundingBox(x=box["x"], y=box["y"], width=box["width"], height=box["height"])

    async def dispatch(self, event: InteractionEvent) -> None:
        await self.locator.dispatch_event(event.kind, event.init_dict(), timeout=NODE_TIMEOUT_MS)

    async def focus(self) -> None:
        await self.locator.focus(timeout=NODE_TIMEOUT_MS)

    async def blur(self) -> None:
        await self._evaluate("(el) => el.blur()")

    async def is_disabled(self) -> bool:
        return await self._evaluate("(el) => !!el.disabled")

    async def read_gate(self) -> Tuple[bool, bool]:
        disabled, read_only = await self._evaluate(_READ_GATE_JS)
        return disabled, read_only

    async def set_gate(self, disabled: bool, read_only: bool) -> None:
        await self._evaluate(_SET_GATE_JS, [disabled, read_only])

    async def write_native_value(self, value: str) -> bool:
        return await self._evaluate(_NATIVE_VALUE_SETTER_JS, value)

    async def value(self) -> str:
        return await self._evaluate("(el) => el.value")


class PageDocument:
    """对 Playwright Page 的结构化查询"""

    def __init__(self, page: Page):
        self.page = page

    async def query_all(self, selector: str) -> List[PageNode]:
        locator = self.page.locator(selector)
        count = await locator.count()
        return [PageNode(locator.nth(i), f"{selector}[{i}]") for i in range(count)]
