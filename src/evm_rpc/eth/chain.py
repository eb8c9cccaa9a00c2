"""Chain state, ``net_*`` and ``web3_*`` wrappers."""

from __future__ import annotations

from .. import transfer
from ..constants import ETHMethod, NetMethod, Web3Method
from ..context import RequestContext
from .base import MethodsBase


class ChainMethods(MethodsBase):
    def get_chain_id(self, *, context: RequestContext | None = None) -> int:
        return transfer.to_int(self._request(ETHMethod.CHAIN_ID, context=context))

    def gas_price(self, *, context: RequestContext | None = None) -> int:
        return transfer.to_int(self._request(ETHMethod.GAS_PRICE, context=context))

    def net_version(self, *, context: RequestContext | None = None) -> str:
        return transfer.to_str(self._request(NetMethod.VERSION, context=context))

    def net_listening(self, *, context: RequestContext | None = None) -> bool:
        return transfer.to_bool(self._request(NetMethod.LISTENING, context=context))

    def net_peer_count(self, *, context: RequestContext | None = None) -> int:
        return transfer.to_uint64(self._request(NetMethod.PEER_COUNT, context=context))

    def client_version(self, *, context: RequestContext | None = None) -> str:
        return transfer.to_str(self._request(Web3Method.CLIENT_VERSION, context=context))
