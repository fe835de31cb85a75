"""Asset registry lookups."""

from collections.abc import Mapping

from pingu_sdk.pingu_rpc.config import AssetConfig
from pingu_sdk.pingu_rpc.exceptions import UnknownAssetError


def get_asset(asset: str, assets: Mapping[str, AssetConfig]) -> AssetConfig:
    """Get the asset config for a symbol. Raises UnknownAssetError if the symbol is not configured."""
    asset_config = assets.get(asset)
    if asset_config is None:
        raise UnknownAssetError(f"Unknown asset '{asset}'. Available assets: {sorted(assets)}")
    return asset_config
