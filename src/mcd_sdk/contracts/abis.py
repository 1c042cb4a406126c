"""Minimal ABI fragments for the contracts the SDK talks to."""

from typing import Any, Dict, List


def _fn(name: str, inputs: List[str], outputs: List[str]) -> Dict[str, Any]:
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": f"arg{i}", "type": t} for i, t in enumerate(inputs)],
        "outputs": [{"name": "", "type": t} for t in outputs],
    }


CHAINLOG_ABI = [
    _fn("getAddress", ["bytes32"], ["address"]),
]

PSM_ABI = [
    _fn("buyGem", ["address", "uint256"], []),
    _fn("sellGem", ["address", "uint256"], []),
    _fn("gemJoin", [], ["address"]),
    _fn("dai", [], ["address"]),
    _fn("tin", [], ["uint256"]),
    _fn("tout", [], ["uint256"]),
]

POT_ABI = [
    _fn("chi", [], ["uint256"]),
    _fn("dsr", [], ["uint256"]),
    _fn("rho", [], ["uint256"]),
]

ERC20_ABI = [
    _fn("decimals", [], ["uint8"]),
    _fn("allowance", ["address", "address"], ["uint256"]),
    _fn("approve", ["address", "uint256"], ["bool"]),
    _fn("balanceOf", ["address"], ["uint256"]),
]

SAVINGS_DAI_ABI = ERC20_ABI + [
    _fn("dai", [], ["address"]),
    _fn("deposit", ["uint256", "address"], ["uint256"]),
    _fn("redeem", ["uint256", "address", "address"], ["uint256"]),
    _fn("previewDeposit", ["uint256"], ["uint256"]),
    _fn("previewRedeem", ["uint256"], ["uint256"]),
]
