"""In-memory stand-ins for AsyncWeb3 connections, one node per RPC URL."""

from typing import Any, Callable, Optional, Union

import asyncio
from collections import defaultdict
from types import SimpleNamespace

from pingu_sdk.pingu_rpc.consts import ADDRESS_ZERO
from pingu_sdk.pingu_rpc.types import ContractName

# Deterministic registry addresses: 0x...01, 0x...02, ...
CONTRACT_ADDRESSES = {name.value: "0x" + f"{i + 1:040x}" for i, name in enumerate(ContractName)}
DATA_STORE_ADDRESS = CONTRACT_ADDRESSES[ContractName.DATA_STORE.value]

Response = Union[Any, Callable[..., Any]]


class FakeNode:
    """One RPC endpoint; scripted failures are raised before the shared responses are served."""

    def __init__(self, url: str, network: "FakeNetwork"):
        self.url = url
        self.network = network
        self.down: Optional[BaseException] = None
        self.delay: float = 0
        self.delays: dict[tuple[str, Optional[tuple]], float] = {}
        self.failures: dict[str, list[BaseException]] = defaultdict(list)
        self.calls: list[tuple[str, tuple]] = []

    def fail(self, function: str, *errors: BaseException) -> None:
        """Raise `errors`, one per call, on the next calls of `function`."""
        self.failures[function].extend(errors)

    def slow(self, function: str, seconds: float, args: Optional[tuple] = None) -> None:
        """Delay calls of `function`, or only its calls with `args`."""
        self.delays[(function, args)] = seconds

    def calls_to(self, function: str) -> list[tuple]:
        return [args for name, args in self.calls if name == function]

    async def handle(self, function: str, args: tuple) -> Any:
        self.calls.append((function, args))
        delay = self.delay
        for (name, only_args), seconds in self.delays.items():
            if name == function and only_args in (None, args):
                delay = seconds
        if delay:
            await asyncio.sleep(delay)
        if self.down is not None:
            raise self.down
        if self.failures[function]:
            raise self.failures[function].pop(0)
        return self.network.respond(function, args)


class FakeCall:
    def __init__(self, node: FakeNode, function: str, args: tuple):
        self._node = node
        self._function = function
        self._args = args

    async def call(self) -> Any:
        return await self._node.handle(self._function, self._args)


class FakeContract:
    def __init__(self, node: FakeNode, address: str, abi: list):
        self.address = address
        self.abi = abi
        self.functions = _FakeFunctions(node, abi)


class _FakeFunctions:
    def __init__(self, node: FakeNode, abi: list):
        self._node = node
        self._names = {entry["name"] for entry in abi if entry.get("type") == "function"}

    def __getattr__(self, name: str):
        if name.startswith("_") or name not in self._names:
            raise AttributeError(name)
        return lambda *args: FakeCall(self._node, name, args)


class FakeProvider:
    def __init__(self):
        self.disconnected = False

    async def disconnect(self) -> None:
        self.disconnected = True


class FakeWeb3:
    def __init__(self, node: FakeNode, timeout: float):
        self.node = node
        self.timeout = timeout
        self.provider = FakeProvider()
        self.eth = SimpleNamespace(contract=self._contract)

    def _contract(self, address: str, abi: list) -> FakeContract:
        return FakeContract(self.node, address, abi)


class FakeNetwork:
    """Shared chain state served by every node."""

    def __init__(self):
        self.nodes: dict[str, FakeNode] = {}
        self.connections: dict[str, FakeWeb3] = {}
        self.addresses = dict(CONTRACT_ADDRESSES)
        self.responses: dict[str, Response] = {}

    def node(self, url: str) -> FakeNode:
        if url not in self.nodes:
            self.nodes[url] = FakeNode(url, self)
        return self.nodes[url]

    def web3_factory(self, url: str, timeout: float) -> FakeWeb3:
        w3 = FakeWeb3(self.node(url), timeout)
        self.connections[url] = w3
        return w3

    def set(self, function: str, response: Response) -> None:
        """Serve `response` for `function`; callables are called with the call arguments."""
        self.responses[function] = response

    def respond(self, function: str, args: tuple) -> Any:
        if function == "getAddress":
            return self.addresses.get(args[0], ADDRESS_ZERO)
        if function not in self.responses:
            raise AssertionError(f"No fake response configured for {function}")
        response = self.responses[function]
        return response(*args) if callable(response) else response

    def total_calls(self, function: Optional[str] = None) -> int:
        return sum(len(node.calls_to(function) if function else node.calls) for node in self.nodes.values())


def make_urls(count: int) -> tuple[str, ...]:
    return tuple(f"https://rpc-{i}.test" for i in range(count))
