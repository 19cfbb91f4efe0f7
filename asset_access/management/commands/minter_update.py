from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from asset_access.services.access_controller import AssetAccessController
from ledger.exceptions import LedgerError


class Command(BaseCommand):
    help = "Set up, launch or execute a timelocked change of the token minter"

    def add_arguments(self, parser):
        parser.add_argument('action', choices=['initialize', 'launch', 'execute', 'status'])
        parser.add_argument('--minter', help='New minter address (launch only)')
        parser.add_argument('--token', help='Controlled token address (initialize only)')
        parser.add_argument('--caller', default=settings.ASSET_ACCESS_OWNER_ADDRESS)

    def handle(self, *args, **options):
        controller = AssetAccessController()
        try:
            if options['action'] == 'initialize':
                control = controller.initialize(options['caller'], options['token'] or settings.TOKEN_SALE_TOKEN_ADDRESS)
                self.stdout.write(self.style.SUCCESS(f'Controller of {control.token} owned by {control.owner}'))
            elif options['action'] == 'launch':
                if not options['minter']:
                    raise CommandError('--minter is required to launch an update')
                update = controller.launch_update(options['caller'], options['minter'])
                self.stdout.write(self.style.SUCCESS(
                    f'Update to {update.new_minter} launched, executable from {update.end_grace_period}'
                ))
            elif options['action'] == 'execute':
                minter = controller.execute_update(options['caller'])
                self.stdout.write(self.style.SUCCESS(f'Minter is now {minter}'))
            else:
                update = controller.get_pending_update()
                self.stdout.write(f'Current minter: {controller.get_current_minter() or "unset"}')
                self.stdout.write(
                    f'Pending: {update.new_minter or "-"} '
                    f'(grace ends {update.end_grace_period}, pending={update.has_to_be_executed})'
                )
        except LedgerError as e:
            raise CommandError(str(e))
