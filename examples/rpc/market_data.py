#!/usr/bin/env python3
"""
Example script showing how to read Pingu market state using the Pingu SDK.

Before running this example, you can set the following variables in a .env file:
- CHAIN_ID: The chain ID (10143 for Monad, the default)
- PINGU_RPC_URLS: Optional comma separated RPC endpoints, replacing the built-in list
- PINGU_RPC_TIMEOUT: Optional per-attempt timeout in seconds
"""
import asyncio
import logging

from dotenv import load_dotenv

from pingu_sdk import PinguClient, PinguReader
from pingu_sdk.pingu_rpc import QueryError

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")


async def main():
    """Run the example to print markets, open interest and funding."""
    # Load environment variables
    load_dotenv()

    async with PinguClient() as client:
        reader = PinguReader(client)

        print("\n--- Markets ---")
        markets = await reader.get_markets()
        print(f"Found {len(markets)} markets")

        for market in markets[:5]:
            try:
                oi = await reader.get_open_interest(market.market)
                funding_rate = await reader.get_funding_rate(market.market)
            except QueryError as e:
                print(f"{market.market}: {e}")
                continue

            print(f"{market.market} (max leverage {market.max_leverage}x, fee {market.fee_rate:.4%})")
            print(f"  OI long: {oi.long:,.2f}  short: {oi.short:,.2f}  total: {oi.total:,.2f}")
            print(f"  Funding rate (8h): {funding_rate:.6f}%")

        print("\n--- Pool ---")
        print(f"USDC pool balance: {await reader.get_pool_balance('USDC'):,.2f}")
        print(f"USDC global UPL: {await reader.get_global_upl('USDC'):,.2f}")
        print(f"MON pool balance: {await reader.get_pool_balance('MON'):,.4f}")

        print("\n--- Endpoints ---")
        for url, stats in client.endpoint_stats().items():
            if stats["total_requests"]:
                print(f"{url}: {stats['total_requests']} requests, {stats['failed_requests']} failed")


if __name__ == "__main__":
    asyncio.run(main())
