from django.db import transaction
from django.test import TestCase

from ledger.exceptions import InsufficientFundsError, ValidationError
from ledger.models import Asset, AssetHolding, LedgerEvent
from ledger.services.accounts import is_contract, register_contract, validate_address
from ledger.services.assets import create_asset, get_asset
from ledger.services.events import emit_event, events_named
from ledger.tests.utils import new_address

E18 = 10 ** 18


class LedgerAssetTests(TestCase):
    def setUp(self):
        self.holder = new_address()
        self.spender = new_address()
        self.recipient = new_address()
        self.asset_id = new_address()
        self.asset = create_asset(self.asset_id, 'USDC', initial_supply=1_000_000 * E18, holder=self.holder)

    def test_initial_supply_minted_to_holder(self):
        self.assertEqual(self.asset.balance_of(self.holder), 1_000_000 * E18)
        self.assertEqual(self.asset.total_supply(), 1_000_000 * E18)
        self.assertEqual(self.asset.balance_of(self.recipient), 0)

    def test_amounts_above_64_bits_are_stored_exactly(self):
        amount = 123_456_789_123_456_789 * E18 + 7
        self.asset.mint(self.recipient, amount)

        holding = AssetHolding.objects.get(asset__identifier=self.asset_id, account=self.recipient)
        self.assertEqual(holding.balance, amount)
        self.assertEqual(Asset.objects.get(identifier=self.asset_id).total_supply, 1_000_000 * E18 + amount)

    def test_transfer(self):
        self.asset.transfer(self.holder, self.recipient, 300 * E18)

        self.assertEqual(self.asset.balance_of(self.recipient), 300 * E18)
        self.assertEqual(self.asset.balance_of(self.holder), 999_700 * E18)

    def test_transfer_above_balance_fails(self):
        with self.assertRaisesMessage(InsufficientFundsError, 'transfer amount exceeds balance'):
            self.asset.transfer(self.recipient, self.holder, 1)

    def test_negative_amount_rejected(self):
        with self.assertRaises(ValidationError):
            self.asset.transfer(self.holder, self.recipient, -1)

    def test_transfer_from_requires_allowance(self):
        with self.assertRaisesMessage(InsufficientFundsError, 'insufficient allowance'):
            self.asset.transfer_from(self.spender, self.holder, self.recipient, 1)

        self.asset.approve(self.holder, self.spender, 500)
        self.asset.transfer_from(self.spender, self.holder, self.recipient, 200)

        self.assertEqual(self.asset.balance_of(self.recipient), 200)
        self.assertEqual(self.asset.allowance(self.holder, self.spender), 300)

    def test_transfer_from_checks_owner_balance(self):
        self.asset.approve(self.recipient, self.spender, 10 ** 30)
        with self.assertRaisesMessage(InsufficientFundsError, 'transfer amount exceeds balance'):
            self.asset.transfer_from(self.spender, self.recipient, self.holder, 1)
        self.assertEqual(self.asset.allowance(self.recipient, self.spender), 10 ** 30)

    def test_burn_reduces_supply(self):
        self.asset.burn(self.holder, 1_000 * E18)

        self.assertEqual(self.asset.balance_of(self.holder), 999_000 * E18)
        self.assertEqual(self.asset.total_supply(), 999_000 * E18)

    def test_burn_above_balance_fails(self):
        with self.assertRaises(InsufficientFundsError):
            self.asset.burn(self.recipient, 1)

    def test_failed_block_rolls_back_movements(self):
        with self.assertRaises(InsufficientFundsError):
            with transaction.atomic():
                self.asset.transfer(self.holder, self.recipient, 100)
                self.asset.transfer(self.recipient, self.spender, 101)

        self.assertEqual(self.asset.balance_of(self.recipient), 0)
        self.assertEqual(self.asset.balance_of(self.holder), 1_000_000 * E18)

    def test_get_asset(self):
        self.assertEqual(get_asset(self.asset_id).balance_of(self.holder), 1_000_000 * E18)
        with self.assertRaises(ValidationError):
            get_asset(new_address())

    def test_create_asset_twice_fails(self):
        with self.assertRaises(ValidationError):
            create_asset(self.asset_id, 'USDC')


class ContractAccountTests(TestCase):
    def test_registered_application_is_contract(self):
        contract = register_contract(1234, label='bridge')

        self.assertTrue(is_contract(contract.address))
        self.assertEqual(register_contract(1234).pk, contract.pk)

    def test_plain_account_is_not_contract(self):
        self.assertFalse(is_contract(new_address()))
        self.assertFalse(is_contract(''))

    def test_validate_address(self):
        address = new_address()
        self.assertEqual(validate_address(address), address)
        with self.assertRaises(ValidationError):
            validate_address('not-an-address')


class LedgerEventTests(TestCase):
    def test_amounts_serialized_as_strings(self):
        emit_event('token_sale', 'TokenWithdrew', 100, account='A', amount=10 ** 24, tokens=[1, 2])

        event = events_named('TokenWithdrew')[0]
        self.assertEqual(event.payload, {'account': 'A', 'amount': str(10 ** 24), 'tokens': ['1', '2']})
        self.assertEqual(event.block_time, 100)

    def test_events_roll_back_with_operation(self):
        with self.assertRaises(RuntimeError):
            with transaction.atomic():
                emit_event('token_sale', 'TokenBought', 1)
                raise RuntimeError('abort')

        self.assertFalse(LedgerEvent.objects.filter(name='TokenBought').exists())
