"""Tests for the access list builder."""

import pytest
from hexbytes import HexBytes

from evm_rpc.access_list import AccessListBuilder
from evm_rpc.exceptions import ValidationError

TOKEN = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
ROUTER = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"


def _slot(n: int) -> str:
    return "0x" + f"{n:064x}"


def test_keys_are_deduplicated_per_address():
    builder = AccessListBuilder()
    builder.add(TOKEN, 1).add(TOKEN.lower(), _slot(1)).add(TOKEN, 2)

    (entry,) = builder.build()

    assert entry.address == TOKEN
    assert entry.storage_keys == [HexBytes(_slot(1)), HexBytes(_slot(2))]


def test_addresses_keep_insertion_order():
    builder = AccessListBuilder()
    builder.add_address_only(ROUTER).add(TOKEN, 0).add_address_only(ROUTER)

    assert [entry.address for entry in builder.build()] == [ROUTER, TOKEN]
    assert len(builder) == 2


def test_short_keys_are_left_padded():
    builder = AccessListBuilder().add(TOKEN, "0x01").add(TOKEN, b"\x02")

    assert builder.as_rpc() == [{"address": TOKEN, "storageKeys": [_slot(1), _slot(2)]}]


def test_address_only_entry_has_no_keys():
    assert AccessListBuilder().add_address_only(ROUTER).as_rpc() == [
        {"address": ROUTER, "storageKeys": []}
    ]


def test_empty_builder():
    builder = AccessListBuilder()
    assert builder.build() == []
    assert len(builder) == 0


@pytest.mark.parametrize("address", ["0x1234", "not-an-address", ""])
def test_invalid_address(address):
    with pytest.raises(ValidationError) as excinfo:
        AccessListBuilder().add_address_only(address)
    assert excinfo.value.field == "address"


@pytest.mark.parametrize("key", [-1, 2**256, "0x" + "11" * 33, "0xzz"])
def test_invalid_storage_key(key):
    with pytest.raises(ValidationError) as excinfo:
        AccessListBuilder().add(TOKEN, key)
    assert excinfo.value.field == "storage_key"
