"""Shared fakes standing in for the live document tree."""

import random
from typing import Dict, List, Optional, Set

import pytest
from playwright.async_api import Error as PlaywrightError

from trade_agent.config import DelayRange, TradeConfig
from trade_agent.models import BoundingBox
from trade_agent.pacing import Pacer


class FakeNode:
    """In-memory element exposing the async methods the core relies on."""

    def __init__(
        self,
        document: "FakeDocument",
        ref: str,
        text: str = "",
        attrs: Optional[Dict[str, str]] = None,
        disabled: bool = False,
        read_only: bool = False,
        box: Optional[BoundingBox] = BoundingBox(100, 200, 80, 30),
        native_setter: bool = True,
    ):
        self.document = document
        self.ref = ref
        self._text = text
        self.attrs = dict(attrs or {})
        self.disabled = disabled
        self.read_only = read_only
        self.box = box
        self.native_setter = native_setter
        self.current_value = ""
        self.calls: List[str] = []
        self.events = []
        self.gate_writes = []
        self.gate_during_write = None
        self.fail_dispatch = False

    async def text(self) -> str:
        return self._text

    async def get_attribute(self, name: str) -> Optional[str]:
        return self.attrs.get(name)

    async def set_attribute(self, name: str, value: str) -> None:
        self.attrs[name] = value

    async def bounding_box(self) -> Optional[BoundingBox]:
        return self.box

    async def dispatch(self, event) -> None:
        if self.fail_dispatch:
            raise PlaywrightError("Element is not attached to the DOM")
        self.events.append(event)
        self.calls.append(event.kind)
        self.document.log.append((self.ref, event.kind))

    async def focus(self) -> None:
        self.calls.append("focus")

    async def blur(self) -> None:
        self.calls.append("blur")

    async def is_disabled(self) -> bool:
        return self.disabled

    async def read_gate(self):
        return self.disabled, self.read_only

    async def set_gate(self, disabled: bool, read_only: bool) -> None:
        self.gate_writes.append((disabled, read_only))
        self.disabled = disabled
        self.read_only = read_only

    async def write_native_value(self, value: str) -> bool:
        if not self.native_setter:
            return False
        self.gate_during_write = (self.disabled, self.read_only)
        self.current_value = value
        self.calls.append("write")
        return True

    async def value(self) -> str:
        return self.current_value

    @property
    def clicked(self) -> bool:
        return "click" in self.calls


class FakeDocument:
    """Maps selectors to node lists; query_all mirrors querySelectorAll."""

    def __init__(self):
        self.nodes: Dict[str, List[FakeNode]] = {}
        self.log = []
        self.broken: Set[str] = set()

    def add(self, selector: str, **kwargs) -> FakeNode:
        bucket = self.nodes.setdefault(selector, [])
        node = FakeNode(self, f"{selector}[{len(bucket)}]", **kwargs)
        bucket.append(node)
        return node

    def remove(self, selector: str) -> None:
        self.nodes.pop(selector, None)

    def first(self, selector: str) -> FakeNode:
        return self.nodes[selector][0]

    async def query_all(self, selector: str) -> List[FakeNode]:
        if selector in self.broken:
            raise PlaywrightError("Execution context was destroyed")
        return list(self.nodes.get(selector, []))


class FakeSleep:
    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def config() -> TradeConfig:
    return TradeConfig(iterations=3, iteration_delay=DelayRange(3000, 7000))


@pytest.fixture
def sleeper() -> FakeSleep:
    return FakeSleep()


@pytest.fixture
def pacer(sleeper) -> Pacer:
    return Pacer(rng=random.Random(7), sleep=sleeper)


def build_trade_page(config: TradeConfig, modal: bool = False, custom_option: bool = True) -> FakeDocument:
    """A document holding every control of the trade panel exactly once."""
    s = config.selectors
    doc = FakeDocument()
    doc.add(s.buy_tab(), text=f"  {s.buy_tab_text} ")
    doc.add(s.sell_tab(), text=s.sell_tab_text)
    doc.add(s.amount_input, attrs={"type": "text"})
    doc.add(s.slider, attrs={"role": "slider", "type": "range"})
    doc.add(s.slippage_settings)
    doc.add(s.slippage_options, text="0.5%")
    if custom_option:
        doc.add(s.slippage_options, text=f"{s.custom_marker} %")
    doc.add(s.slippage_input)
    doc.add(s.confirm_button, text="确认")
    doc.add(s.buy_button, text="买入")
    doc.add(s.sell_button, text="卖出")
    if modal:
        doc.add(s.modal_footer)
        doc.add(s.cancel_button, text="取消")
    return doc


@pytest.fixture
def trade_page(config) -> FakeDocument:
    return build_trade_page(config)


@pytest.fixture
def make_page(config):
    def _make(**kwargs) -> FakeDocument:
        return build_trade_page(config, **kwargs)

    return _make


@pytest.fixture
def document() -> FakeDocument:
    return FakeDocument()
