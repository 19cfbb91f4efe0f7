from django.core.management.base import BaseCommand, CommandError

from ledger.exceptions import LedgerError
from token_sale.services.sale_engine import SaleEngine


class Command(BaseCommand):
    help = "Burn every sold-token unit still held by the sale once it has ended"

    def add_arguments(self, parser):
        parser.add_argument(
            '--caller',
            default='',
            help='Identity recorded as the requester (finalization is permissionless)',
        )

    def handle(self, *args, **options):
        try:
            burnt = SaleEngine().burn_remaining_tokens(options['caller'])
        except LedgerError as e:
            raise CommandError(str(e))
        if burnt:
            self.stdout.write(self.style.SUCCESS(f'Burnt {burnt} remaining tokens'))
        else:
            self.stdout.write(self.style.WARNING('No remaining tokens to burn'))
