"""
Shared fixtures for whitelist Merkle tests.
"""
import pytest


def make_address(suffix: str) -> str:
    return "0x" + "a" * (40 - len(suffix)) + suffix


@pytest.fixture
def whitelist():
    """Three members, so one tree level has an odd node."""
    return [make_address("1"), make_address("2"), make_address("3")]


@pytest.fixture
def outsider():
    return make_address("9")


@pytest.fixture
def hardhat_whitelist():
    """Default Hardhat signer addresses, checksummed."""
    return [
        "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC",
        "0x90F79bf6EB2c4f870365E785982E1f101E93b906",
        "0x15d34AAf54267DB7D7c367839AAf71A00a2C6A65",
        "0x9965507D1a55bcC2695C58ba16FB37d819B0A4dc",
        "0x976EA74026E726554dB657fA54763abd0C3a0aa9",
    ]
