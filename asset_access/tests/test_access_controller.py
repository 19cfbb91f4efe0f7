from io import StringIO

from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import TestCase

from asset_access.services.access_controller import GRACE_PERIOD, AssetAccessController
from ledger.exceptions import AuthorizationError, PhaseError, TimelockError, ValidationError
from ledger.services.accounts import register_contract
from ledger.services.assets import create_asset
from ledger.services.events import events_named
from ledger.tests.utils import FakeClock, new_address

E18 = 10 ** 18
DAY = 24 * 3600


class AccessControllerTestCase(TestCase):
    def setUp(self):
        self.clock = FakeClock(1_700_000_000)
        self.owner = new_address()
        self.holder = new_address()
        self.token_id = new_address()
        self.token = create_asset(self.token_id, 'TST', initial_supply=1_000 * E18, holder=self.holder)
        self.minter_a = register_contract(1001, label='minter A').address
        self.minter_b = register_contract(1002, label='minter B').address

        self.controller = AssetAccessController(clock=self.clock)
        self.controller.initialize(self.owner, self.token_id)

    def install_minter(self, minter):
        self.controller.launch_update(self.owner, minter)
        self.clock.advance(GRACE_PERIOD)
        self.controller.execute_update(self.owner)


class MinterUpdateTests(AccessControllerTestCase):
    def test_defaults(self):
        update = self.controller.get_pending_update()

        self.assertIsNone(self.controller.get_current_minter())
        self.assertIsNone(update.new_minter)
        self.assertEqual(update.end_grace_period, 0)
        self.assertFalse(update.has_to_be_executed)

    def test_initialize_twice(self):
        with self.assertRaises(ValidationError):
            self.controller.initialize(self.owner, self.token_id)

    def test_uninitialized_controller(self):
        from asset_access.models import MinterControl

        MinterControl.objects.all().delete()
        with self.assertRaises(PhaseError):
            self.controller.get_current_minter()

    def test_launch_update(self):
        update = self.controller.launch_update(self.owner, self.minter_a)

        self.assertEqual(update.new_minter, self.minter_a)
        self.assertEqual(update.end_grace_period, self.clock.now + GRACE_PERIOD)
        self.assertTrue(update.has_to_be_executed)
        self.assertIsNone(self.controller.get_current_minter())
        event = events_named('MinterUpdateLaunched')[-1]
        self.assertEqual(event.payload, {'newMinter': self.minter_a})

    def test_launch_requires_owner(self):
        with self.assertRaisesMessage(AuthorizationError, 'caller is not the owner'):
            self.controller.launch_update(self.holder, self.minter_a)

    def test_launch_requires_contract(self):
        with self.assertRaisesMessage(ValidationError, 'address provided is not a contract'):
            self.controller.launch_update(self.owner, self.holder)

    def test_cannot_launch_twice(self):
        self.controller.launch_update(self.owner, self.minter_a)
        with self.assertRaisesMessage(TimelockError, 'current update has to be executed'):
            self.controller.launch_update(self.owner, self.minter_b)
        self.assertEqual(self.controller.get_pending_update().new_minter, self.minter_a)

    def test_grace_period(self):
        launched_at = self.clock.now
        self.controller.launch_update(self.owner, self.minter_a)

        self.clock.set(launched_at + 6 * DAY)
        with self.assertRaisesMessage(TimelockError, 'grace period has not finished'):
            self.controller.execute_update(self.owner)

        self.clock.set(launched_at + GRACE_PERIOD)
        self.assertEqual(self.controller.execute_update(self.owner), self.minter_a)
        self.assertEqual(self.controller.get_current_minter(), self.minter_a)
        self.assertFalse(self.controller.get_pending_update().has_to_be_executed)
        event = events_named('MinterUpdateExecuted')[-1]
        self.assertEqual(event.payload, {'newMinter': self.minter_a})

    def test_execute_requires_owner(self):
        self.controller.launch_update(self.owner, self.minter_a)
        self.clock.advance(GRACE_PERIOD)
        with self.assertRaises(AuthorizationError):
            self.controller.execute_update(self.minter_a)

    def test_execute_without_launch(self):
        with self.assertRaisesMessage(TimelockError, 'no update launched'):
            self.controller.execute_update(self.owner)

    def test_execute_twice(self):
        self.install_minter(self.minter_a)
        with self.assertRaisesMessage(TimelockError, 'update already executed'):
            self.controller.execute_update(self.owner)

    def test_swap_minter(self):
        self.install_minter(self.minter_a)
        self.controller.launch_update(self.owner, self.minter_b)

        # The old minter keeps its rights until the swap is executed
        self.controller.mint_from_controller(self.minter_a, self.holder, E18)

        self.clock.advance(GRACE_PERIOD)
        self.controller.execute_update(self.owner)

        with self.assertRaisesMessage(AuthorizationError, 'access denied'):
            self.controller.mint_from_controller(self.minter_a, self.holder, E18)
        self.controller.mint_from_controller(self.minter_b, self.holder, E18)
        self.assertEqual(self.token.balance_of(self.holder), 1_002 * E18)


class SupplyGateTests(AccessControllerTestCase):
    def test_no_minter_set(self):
        for caller in (self.owner, self.minter_a):
            with self.subTest(caller=caller):
                with self.assertRaisesMessage(AuthorizationError, 'sender account not recognized'):
                    self.controller.mint_from_controller(caller, self.holder, E18)
                with self.assertRaisesMessage(AuthorizationError, 'sender account not recognized'):
                    self.controller.burn_from_controller(caller, self.holder, E18)

    def test_minter_mints_and_burns(self):
        self.install_minter(self.minter_a)

        self.controller.mint_from_controller(self.minter_a, self.holder, 5 * E18)
        self.assertEqual(self.token.balance_of(self.holder), 1_005 * E18)
        self.assertEqual(self.token.total_supply(), 1_005 * E18)

        self.controller.burn_from_controller(self.minter_a, self.holder, 10 * E18)
        self.assertEqual(self.token.balance_of(self.holder), 995 * E18)
        self.assertEqual(self.token.total_supply(), 995 * E18)

    def test_other_callers_denied(self):
        self.install_minter(self.minter_a)
        for caller in (self.owner, self.holder, self.minter_b):
            with self.subTest(caller=caller):
                with self.assertRaisesMessage(AuthorizationError, 'access denied'):
                    self.controller.mint_from_controller(caller, caller, E18)
                with self.assertRaisesMessage(AuthorizationError, 'access denied'):
                    self.controller.burn_from_controller(caller, self.holder, E18)
        self.assertEqual(self.token.total_supply(), 1_000 * E18)


class MinterQueryTests(AccessControllerTestCase):
    def test_query_minter_state(self):
        from config.schema import schema

        self.controller.launch_update(self.owner, self.minter_a)

        result = schema.execute('''
            query {
                currentMinter
                pendingMinterUpdate { newMinter endGracePeriod hasToBeExecuted }
            }
        ''')

        self.assertIsNone(result.errors)
        self.assertIsNone(result.data['currentMinter'])
        pending = result.data['pendingMinterUpdate']
        self.assertEqual(pending['newMinter'], self.minter_a)
        self.assertEqual(pending['endGracePeriod'], self.clock.now + GRACE_PERIOD)
        self.assertTrue(pending['hasToBeExecuted'])


class MinterCommandTests(TestCase):
    def test_initialize_and_status(self):
        owner, token = new_address(), new_address()
        out = StringIO()

        call_command('minter_update', 'initialize', '--caller', owner, '--token', token, stdout=out)
        call_command('minter_update', 'status', stdout=out)

        self.assertIn('Current minter: unset', out.getvalue())

    def test_launch_by_stranger(self):
        owner, token = new_address(), new_address()
        minter = register_contract(77).address
        call_command('minter_update', 'initialize', '--caller', owner, '--token', token, stdout=StringIO())

        with self.assertRaisesMessage(CommandError, 'caller is not the owner'):
            call_command('minter_update', 'launch', '--minter', minter, '--caller', new_address())

    def test_launch_requires_minter(self):
        with self.assertRaisesMessage(CommandError, '--minter is required'):
            call_command('minter_update', 'launch', '--caller', new_address())
