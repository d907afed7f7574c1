"""Shared fixtures for the CloudAPI client tests."""

import pathlib

import pytest

from triton_cloudapi.cloudapi import signing

FIXTURES = pathlib.Path(__file__).parent / "fixtures"


@pytest.fixture
def rsa_key_path() -> pathlib.Path:
    """Path to a 2048-bit RSA test key in PKCS#8 PEM format."""
    return FIXTURES / "rsa_test_key.pem"


@pytest.fixture
def openssh_key_path() -> pathlib.Path:
    """Path to the same RSA test key in OpenSSH format."""
    return FIXTURES / "rsa_test_key_openssh"


@pytest.fixture
def ec_key_path() -> pathlib.Path:
    """Path to a P-256 EC test key, which cannot sign rsa-sha256."""
    return FIXTURES / "ec_test_key.pem"


@pytest.fixture
def credential(rsa_key_path: pathlib.Path) -> signing.Credential:
    """Credential for account "jill" signing with the RSA test key."""
    return signing.Credential(
        endpoint="https://cloudapi.test",
        account="jill",
        key_name="test-key",
        private_key=rsa_key_path,
    )
