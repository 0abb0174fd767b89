"""执行模块：合成点击事件、写入受框架接管的控件值"""

from typing import List, Optional

from playwright.async_api import Error as PlaywrightError

from .dom import PageNode
from .errors import FailureReason
from .models import InteractionEvent

# 点击坐标相对包围盒左上角的偏移，保证落在细长控件内部
CLICK_INSET = 10

GESTURES = ("click",)


async def build_click_events(node: PageNode) -> List[InteractionEvent]:
    """按 mousedown → click → mouseup 的顺序生成事件"""
    box = await node.bounding_box()
    if box is None:
        point = (CLICK_INSET, CLICK_INSET)
    else:
        point = (box.x + CLICK_INSET, box.y + CLICK_INSET)
    return [
        InteractionEvent(kind="mousedown", target_ref=node.ref),
        InteractionEvent(kind="click", target_ref=node.ref, coordinates=point),
        InteractionEvent(kind="mouseup", target_ref=node.ref),
    ]


async def simulate(node: PageNode, gesture: str = "click", label: Optional[str] = None) -> bool:
    """
    对节点执行一次合成手势，返回是否成功。

    目标被禁用时不派发任何事件并返回 False；节点在派发途中失效同样返回 False，
    不向上抛出。
    """
    if gesture not in GESTURES:
        raise ValueError(f"未知手势: {gesture}")
    label = label or node.ref
    try:
        if await node.is_disabled():
            print(f"⚠ {label} 被禁用，忽略点击")
            return False
        events = await build_click_events(node)
        await node.focus()
        for event in events:
            await node.dispatch(event)
    except PlaywrightError as e:
        print(f"❌ 点击 {label} 失败: {e}")
        return False
    print(f"✓ 点击 {label}")
    return True


async def click_failure_reason(node: PageNode) -> FailureReason:
    """simulate 返回 False 之后区分：目标被禁用，还是已经从文档树上脱离"""
    try:
        if await node.is_disabled():
            return FailureReason.GATE_BLOCKED
    except PlaywrightError:
        pass
    return FailureReason.DETACHED


async def set_value(
    node: PageNode,
    value: str,
    commit: Optional[bool] = None,
    rich_state: Optional[bool] = None,
    label: Optional[str] = None,
) -> bool:
    """
    通过原型链上的原生 setter 写入控件值，使 React 之类的框架能观察到变化。

    - 写入期间临时解除 disabled / readOnly，任何退出路径都会恢复。
    - 写入后同步 value 属性；总会派发 input 事件，commit 时再派发 change。
    - rich_state（滑块）会同步 aria-valuenow / aria-valuetext，并用 focus/blur 包住派发。
    - commit 与 rich_state 未指定时，取决于节点是否为 role="slider"。
    - 找不到原生 setter 时返回 False，不抛出异常。
    """
    label = label or node.ref
    try:
        is_slider = await node.get_attribute("role") == "slider"
        was_disabled, was_read_only = await node.read_gate()
    except PlaywrightError as e:
        print(f"❌ 读取 {label} 状态失败: {e}")
        return False
    if commit is None:
        commit = is_slider
    if rich_state is None:
        rich_state = is_slider

    try:
        if was_disabled or was_read_only:
            await node.set_gate(False, False)

        if not await node.write_native_value(value):
            print(f"❌ {label} 找不到原生 value setter")
            return False
        await node.set_attribute("value", value)

        if rich_state:
            await node.set_attribute("aria-valuenow", value)
            await node.set_attribute("aria-valuetext", f"{value} units")
            await node.focus()

        await node.dispatch(InteractionEvent(kind="input", target_ref=node.ref))
        if commit:
            await node.dispatch(InteractionEvent(kind="change", target_ref=node.ref))

        if rich_state:
            await node.blur()
    except PlaywrightError as e:
        print(f"❌ 设置 {label} 的值失败: {e}")
        return False
    finally:
        if was_disabled or was_read_only:
            try:
                await node.set_gate(was_disabled, was_read_only)
            except PlaywrightError as e:
                print(f"⚠ 恢复 {label} 的禁用状态失败: {e}")

    print(f"✓ {label} = '{value}'")
    return True
