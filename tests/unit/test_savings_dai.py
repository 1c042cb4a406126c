"""Unit tests for SavingsDaiService."""

from decimal import Decimal

import pytest
from eth_abi import decode as abi_decode
from eth_utils import to_checksum_address

from mcd_sdk.contracts.abis import ERC20_ABI, SAVINGS_DAI_ABI
from mcd_sdk.core.exceptions import InvalidAmountError, ValidationError, ValidationReason
from mcd_sdk.core.types import EthereumTxType
from mcd_sdk.services.savings_dai import SavingsDaiService


@pytest.fixture
def savings_dai(mcd_provider, config):
    return SavingsDaiService(mcd_provider, config)


def _decode_call(raw_tx, types):
    data = bytes.fromhex(raw_tx.data[2:])
    return abi_decode(types, data[4:])


class TestDeposit:
    """Test deposit batches."""

    @pytest.mark.asyncio
    async def test_approval_then_deposit(self, savings_dai, mcd_provider, addresses):
        txs = await savings_dai.deposit(addresses['user'], addresses['receiver'], "10.5")

        assert [tx.tx_type for tx in txs] == [
            EthereumTxType.ERC20_APPROVAL,
            EthereumTxType.SAVINGS_DAI_ACTION,
        ]

        approve_tx = await txs[0].tx()
        spender, _ = _decode_call(approve_tx, ["address", "uint256"])
        assert approve_tx.to == to_checksum_address(addresses['dai'])
        assert spender.lower() == addresses['savings_dai']

        deposit_tx = await txs[1].tx()
        assets, receiver = _decode_call(deposit_tx, ["uint256", "address"])
        assert deposit_tx.to == to_checksum_address(addresses['savings_dai'])
        assert assets == 10_500_000_000_000_000_000
        assert receiver.lower() == addresses['receiver']

    @pytest.mark.asyncio
    async def test_no_approval_when_allowance_suffices(self, savings_dai, mcd_provider, addresses):
        mcd_provider.on(addresses['dai'], ERC20_ABI, 'allowance', 10 ** 18)

        txs = await savings_dai.deposit(addresses['user'], addresses['user'], "1")

        assert len(txs) == 1
        assert txs[0].tx_type == EthereumTxType.SAVINGS_DAI_ACTION
        assert (await txs[0].gas()).simulated is True

    @pytest.mark.asyncio
    async def test_dai_address_read_once(self, savings_dai, mcd_provider, addresses):
        await savings_dai.deposit(addresses['user'], addresses['user'], "1")
        await savings_dai.deposit(addresses['user'], addresses['user'], "2")

        assert len(mcd_provider.calls_to("dai")) == 1

    @pytest.mark.asyncio
    async def test_zero_assets_rejected(self, savings_dai, mcd_provider, addresses):
        with pytest.raises(ValidationError) as exc_info:
            await savings_dai.deposit(addresses['user'], addresses['user'], "0")

        assert exc_info.value.reason == ValidationReason.NON_POSITIVE_AMOUNT
        assert mcd_provider.calls == []

    @pytest.mark.asyncio
    async def test_invalid_receiver(self, savings_dai, mcd_provider, addresses):
        with pytest.raises(ValidationError) as exc_info:
            await savings_dai.deposit(addresses['user'], "0x1234", "1")

        assert exc_info.value.field == "receiver"
        assert mcd_provider.calls == []


class TestRedeem:
    """Test redeem batches."""

    @pytest.mark.asyncio
    async def test_single_transaction(self, savings_dai, mcd_provider, addresses):
        txs = await savings_dai.redeem(
            user_address=addresses['user'],
            receiver=addresses['receiver'],
            owner=addresses['user'],
            shares="3"
        )

        assert len(txs) == 1
        assert txs[0].tx_type == EthereumTxType.SAVINGS_DAI_ACTION
        assert mcd_provider.calls_to("allowance") == []

        shares, receiver, owner = _decode_call(await txs[0].tx(), ["uint256", "address", "address"])
        assert shares == 3 * 10 ** 18
        assert receiver.lower() == addresses['receiver']
        assert owner.lower() == addresses['user']

    @pytest.mark.asyncio
    async def test_gas_is_simulated(self, savings_dai, addresses):
        txs = await savings_dai.redeem(addresses['user'], addresses['user'], addresses['user'], "1")

        estimate = await txs[0].gas()
        assert estimate.simulated is True
        assert estimate.gas_limit == 130000

    @pytest.mark.asyncio
    async def test_malformed_shares(self, savings_dai, addresses):
        with pytest.raises(InvalidAmountError) as exc_info:
            await savings_dai.redeem(addresses['user'], addresses['user'], addresses['user'], "1,000")

        assert exc_info.value.field == "shares"


class TestPreviews:
    """Test preview queries."""

    @pytest.mark.asyncio
    async def test_preview_deposit(self, savings_dai, mcd_provider, addresses):
        mcd_provider.on(
            addresses['savings_dai'], SAVINGS_DAI_ABI, 'previewDeposit',
            lambda assets: assets * 9 // 10
        )

        shares = await savings_dai.preview_deposit("100")

        assert shares == Decimal(90)
        assert mcd_provider.calls_to("previewDeposit") == [(100 * 10 ** 18,)]

    @pytest.mark.asyncio
    async def test_preview_redeem(self, savings_dai, mcd_provider, addresses):
        mcd_provider.on(
            addresses['savings_dai'], SAVINGS_DAI_ABI, 'previewRedeem',
            lambda shares: shares * 11 // 10
        )

        assert await savings_dai.preview_redeem("10") == Decimal(11)

    @pytest.mark.asyncio
    async def test_preview_zero_allowed(self, savings_dai, mcd_provider, addresses):
        mcd_provider.on(addresses['savings_dai'], SAVINGS_DAI_ABI, 'previewDeposit', 0)

        assert await savings_dai.preview_deposit("0") == 0

    @pytest.mark.asyncio
    async def test_previews_are_idempotent(self, savings_dai, mcd_provider, addresses):
        mcd_provider.on(addresses['savings_dai'], SAVINGS_DAI_ABI, 'previewDeposit', 95 * 10 ** 17)

        first = await savings_dai.preview_deposit("10")
        second = await savings_dai.preview_deposit("10")

        assert first == second == Decimal("9.5")
        assert len(mcd_provider.calls_to("previewDeposit")) == 2

    @pytest.mark.asyncio
    async def test_preview_rejects_malformed(self, savings_dai):
        with pytest.raises(InvalidAmountError):
            await savings_dai.preview_redeem("-1")
