ADDRESS_ZERO = "0x0000000000000000000000000000000000000000"

BPS_DIVIDER = 10000

# Funding is updated every 8 hours
FUNDING_UPDATES_PER_DAY = 3
DAYS_PER_YEAR = 365

DEFAULT_ASSET = "USDC"
DEFAULT_PRICE_DECIMALS = 18
DEFAULT_RPC_TIMEOUT = 10.0

SUBGRAPH_GATEWAY_HOST = "gateway.thegraph.com"

MONAD_CHAIN_ID = 10143

MONAD_RPC_URLS = [
    "https://rpc1.monad.xyz",
    "https://monad.rpc.blxrbdn.com",
    "https://rpc.monad.xyz",
    "https://rpc-mainnet.monadinfra.com",
    "https://rpc3.monad.xyz",
    "https://monad-mainnet.drpc.org",
    "https://monad-mainnet-rpc.spidernode.net",
    "https://rpc.sentio.xyz/monad-mainnet",
    "https://rpc4.monad.xyz",
    "https://infra.originstake.com/monad/evm",
    "https://rpc2.monad.xyz",
    "https://monad-mainnet.api.onfinality.io/public",
    "https://monad-mainnet.gateway.tatum.io",
]

MONAD_SUBGRAPH_ID = "G3dQNfEnDw4q3bn6QRSJUmcLzi7JKTDGYGWwPeYWYa6X"
