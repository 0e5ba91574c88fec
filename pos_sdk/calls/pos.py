# pos_sdk/calls/pos.py

from typing import Union

from ..types import Call, ContractAddress
from ..utils.felts import to_felt
from ..utils.uint256 import uint256_calldata


class PosCalls:
    """Call descriptors for a merchant POS contract"""

    def __init__(self, pos_address: str):
        self.pos_address = ContractAddress(pos_address)

    def _call(self, entrypoint: str, *calldata) -> Call:
        return Call(contract_address=self.pos_address, entrypoint=entrypoint, calldata=list(calldata))

    def build_deposit(self, amount: Union[int, str], tx_id: str, token: str) -> Call:
        return self._call("deposit", *uint256_calldata(amount), to_felt(tx_id), to_felt(token))

    def build_approve_transaction(self, tx_id: str) -> Call:
        return self._call("approve_transaction", to_felt(tx_id))

    def build_reject_transaction(self, tx_id: str) -> Call:
        return self._call("reject_transaction", to_felt(tx_id))

    def build_auto_refund(self, tx_id: str, refund_receiver: str) -> Call:
        return self._call("auto_refunded_amount", to_felt(tx_id), to_felt(refund_receiver))

    def build_withdraw(self, recipient: str, amount: Union[int, str], token: str) -> Call:
        return self._call("withdraw_funds", to_felt(recipient), *uint256_calldata(amount), to_felt(token))
