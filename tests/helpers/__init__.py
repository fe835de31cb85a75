from tests.helpers.fake_web3 import CONTRACT_ADDRESSES, DATA_STORE_ADDRESS, FakeNetwork, FakeNode, make_urls

__all__ = ["CONTRACT_ADDRESSES", "DATA_STORE_ADDRESS", "FakeNetwork", "FakeNode", "make_urls"]
