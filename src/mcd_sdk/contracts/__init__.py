"""Contract ABIs and bindings for the MCD SDK."""

from .abis import CHAINLOG_ABI, PSM_ABI, POT_ABI, ERC20_ABI, SAVINGS_DAI_ABI
from .binding import AbiFunction, ContractBinding, parse_abi, call_contract

__all__ = [
    "CHAINLOG_ABI",
    "PSM_ABI",
    "POT_ABI",
    "ERC20_ABI",
    "SAVINGS_DAI_ABI",
    "AbiFunction",
    "ContractBinding",
    "parse_abi",
    "call_contract",
]
