from dataclasses import replace

import pytest

from pingu_sdk.pingu_rpc.config import (
    MONAD_CONFIG,
    AssetConfig,
    ClientConfig,
    build_subgraph_url,
    get_chain_config,
    load_contract_abis,
)
from pingu_sdk.pingu_rpc.consts import ADDRESS_ZERO, DEFAULT_RPC_TIMEOUT, MONAD_CHAIN_ID, MONAD_RPC_URLS
from pingu_sdk.pingu_rpc.exceptions import ConfigurationError, InvalidChainIdError
from pingu_sdk.pingu_rpc.types import CONTRACT_FUNCTIONS, ContractCall, ContractName

ENV_VARS = ("CHAIN_ID", "PINGU_RPC_URLS", "PINGU_RPC_TIMEOUT", "PINGU_RPC_MAX_ATTEMPTS", "SUBGRAPH_API_KEY")


@pytest.fixture
def env(monkeypatch):
    """Isolate from the process environment and any local .env file."""
    monkeypatch.setattr("pingu_sdk.pingu_rpc.config.load_dotenv", lambda: None)
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.mark.config
def test_defaults_from_empty_environment(env):
    config = ClientConfig.from_env()

    assert config.chain is MONAD_CONFIG
    assert config.chain.rpc_urls == tuple(MONAD_RPC_URLS)
    assert config.timeout == DEFAULT_RPC_TIMEOUT
    assert config.max_attempts is None
    assert config.subgraph_url is None


@pytest.mark.config
def test_rpc_urls_override_keeps_order(env):
    env.setenv("PINGU_RPC_URLS", " https://b.test, https://a.test,,https://c.test ")

    config = ClientConfig.from_env()

    assert config.chain.rpc_urls == ("https://b.test", "https://a.test", "https://c.test")
    assert config.chain.data_store == MONAD_CONFIG.data_store


@pytest.mark.config
def test_timeout_and_max_attempts_from_env(env):
    env.setenv("PINGU_RPC_TIMEOUT", "2.5")
    env.setenv("PINGU_RPC_MAX_ATTEMPTS", "4")

    config = ClientConfig.from_env()

    assert config.timeout == 2.5
    assert config.max_attempts == 4


@pytest.mark.config
@pytest.mark.parametrize("timeout", ["0", "-1"])
def test_non_positive_timeout_is_rejected(env, timeout: str):
    env.setenv("PINGU_RPC_TIMEOUT", timeout)

    with pytest.raises(ConfigurationError, match="PINGU_RPC_TIMEOUT must be positive"):
        ClientConfig.from_env()


@pytest.mark.config
def test_unsupported_chain_is_rejected(env):
    env.setenv("CHAIN_ID", "1")

    with pytest.raises(InvalidChainIdError):
        ClientConfig.from_env()


@pytest.mark.config
def test_empty_rpc_url_list_is_rejected(env):
    env.setenv("PINGU_RPC_URLS", " , ")

    with pytest.raises(ConfigurationError, match="No RPC endpoints configured"):
        ClientConfig.from_env()


@pytest.mark.config
def test_subgraph_url_from_api_key(env):
    env.setenv("SUBGRAPH_API_KEY", "secret")

    config = ClientConfig.from_env()

    assert config.subgraph_url == (
        "https://gateway.thegraph.com/api/secret/subgraphs/id/G3dQNfEnDw4q3bn6QRSJUmcLzi7JKTDGYGWwPeYWYa6X"
    )
    assert build_subgraph_url("k", "abc") == "https://gateway.thegraph.com/api/k/subgraphs/id/abc"


@pytest.mark.config
def test_monad_assets():
    assert get_chain_config(MONAD_CHAIN_ID) is MONAD_CONFIG

    usdc = MONAD_CONFIG.assets["USDC"]
    mon = MONAD_CONFIG.assets["MON"]
    assert (usdc.decimals, usdc.min_size, usdc.is_gas_token) == (6, 100, False)
    assert (mon.address, mon.decimals, mon.min_size, mon.is_gas_token) == (ADDRESS_ZERO, 18, 5000, True)


@pytest.mark.config
def test_asset_config_validation():
    with pytest.raises(ConfigurationError):
        AssetConfig(address=ADDRESS_ZERO, decimals=-1, min_size=1)
    with pytest.raises(ConfigurationError, match="zero address"):
        AssetConfig(address="0x754704bc059f8c67012fed69bc8a327a5aafb603", decimals=18, min_size=1, is_gas_token=True)


@pytest.mark.config
def test_bundled_abis_cover_every_contract_function():
    abis = load_contract_abis()

    for name, functions in CONTRACT_FUNCTIONS.items():
        abi_functions = {entry["name"] for entry in abis[name.value] if entry.get("type") == "function"}
        assert functions <= abi_functions, f"{name.value} ABI is missing {functions - abi_functions}"


@pytest.mark.config
def test_contract_call_only_allows_known_read_functions():
    call = ContractCall(ContractName.POOL_STORE, "getBalance", ("0x0",))
    assert str(call) == "PoolStore.getBalance"

    with pytest.raises(ValueError, match="PoolStore has no read function 'setBalance'"):
        ContractCall(ContractName.POOL_STORE, "setBalance")


@pytest.mark.config
@pytest.mark.parametrize(
    "name,value",
    [("CHAIN_ID", "monad"), ("PINGU_RPC_TIMEOUT", "10s"), ("PINGU_RPC_MAX_ATTEMPTS", "2.5")],
)
def test_non_numeric_settings_are_configuration_errors(env, name: str, value: str):
    env.setenv(name, value)

    with pytest.raises(ConfigurationError, match=f"{name} must be a number"):
        ClientConfig.from_env()


@pytest.mark.config
def test_chain_assets_are_read_only():
    with pytest.raises(TypeError):
        MONAD_CONFIG.assets["ETH"] = MONAD_CONFIG.assets["USDC"]

    assert sorted(MONAD_CONFIG.assets) == ["MON", "USDC"]


@pytest.mark.config
def test_chain_config_copies_assets_on_load():
    assets = {"USDC": MONAD_CONFIG.assets["USDC"]}
    chain = replace(MONAD_CONFIG, assets=assets)

    assets["MON"] = MONAD_CONFIG.assets["MON"]

    assert list(chain.assets) == ["USDC"]
