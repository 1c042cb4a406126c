"""Core type definitions for the MCD SDK."""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Dict, Any, Union
from pydantic import BaseModel, ConfigDict

# None of the supported actions transfer ether
DEFAULT_NULL_VALUE_ON_TX = 0


class EthereumTxType(str, Enum):
    """Classification tag attached to every transaction descriptor."""
    ERC20_APPROVAL = "ERC20_APPROVAL"
    PSM_ACTION = "PSM_ACTION"
    SAVINGS_DAI_ACTION = "SAVINGS_DAI_ACTION"


class ProtocolAction(str, Enum):
    """Actions with a recommended gas limit."""
    DEFAULT = "default"
    APPROVAL = "approval"
    PSM_BUY_GEM = "psm_buy_gem"
    PSM_SELL_GEM = "psm_sell_gem"
    SAVINGS_DAI_DEPOSIT = "savings_dai_deposit"
    SAVINGS_DAI_REDEEM = "savings_dai_redeem"


class PsmParams(BaseModel):
    """Validated arguments for PSM buy/sell actions."""
    model_config = ConfigDict(frozen=True)

    user_address: str
    usr: str
    gem_amt: str


class DepositParams(BaseModel):
    """Validated arguments for a savings Dai deposit."""
    model_config = ConfigDict(frozen=True)

    user_address: str
    receiver: str
    assets: str


class RedeemParams(BaseModel):
    """Validated arguments for a savings Dai redemption."""
    model_config = ConfigDict(frozen=True)

    user_address: str
    receiver: str
    owner: str
    shares: str


@dataclass
class RawTransaction:
    """Encoded, unsigned transaction ready to hand to a signer."""
    to: str
    from_address: str
    data: str
    value: int = DEFAULT_NULL_VALUE_ON_TX
    gas_limit: Optional[int] = None

    def to_rpc_dict(self) -> Dict[str, Any]:
        """JSON-RPC transaction object with hex quantities."""
        tx: Dict[str, Any] = {
            'from': self.from_address,
            'to': self.to,
            'data': self.data,
            'value': hex(self.value),
        }
        if self.gas_limit is not None:
            tx['gas'] = hex(self.gas_limit)
        return tx


@dataclass(frozen=True)
class GasEstimate:
    """Gas limit and price for one transaction.

    ``simulated`` is False when the limit is the recommended value for an
    action that could not be simulated yet because an earlier transaction
    in the batch (an approval) has not been executed.
    """
    gas_limit: int
    gas_price: int
    simulated: bool = True


class RPCRequest(BaseModel):
    """JSON-RPC request structure."""
    jsonrpc: str = "2.0"
    id: Union[str, int] = 1
    method: str
    params: List[Any]


class RPCResponse(BaseModel):
    """JSON-RPC response structure."""
    jsonrpc: str
    id: Union[str, int, None] = None
    result: Optional[Any] = None
    error: Optional[Dict[str, Any]] = None
