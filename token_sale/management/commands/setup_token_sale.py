from django.conf import settings
from django.core.management.base import BaseCommand, CommandError
from django.db import transaction
from django.utils import timezone

from ledger.exceptions import LedgerError
from ledger.models import Asset
from ledger.services.assets import create_asset
from token_sale.services.sale_engine import SaleEngine

DAY = 24 * 3600


class Command(BaseCommand):
    help = 'Deploy the token sale: create the sold token, configure the sale and fund its custody address'

    def add_arguments(self, parser):
        parser.add_argument('--owner', default=settings.TOKEN_SALE_OWNER_ADDRESS)
        parser.add_argument('--sale-address', default=settings.TOKEN_SALE_ADDRESS)
        parser.add_argument('--token', default=settings.TOKEN_SALE_TOKEN_ADDRESS)
        parser.add_argument('--symbol', default=settings.TOKEN_SALE_TOKEN_SYMBOL)
        parser.add_argument('--wallet', default=settings.TOKEN_SALE_WALLET_ADDRESS)
        parser.add_argument(
            '--currencies',
            nargs='*',
            default=list(settings.TOKEN_SALE_PAYMENT_CURRENCIES),
            help='Payment currency addresses to authorize',
        )
        parser.add_argument(
            '--sale-start',
            type=int,
            help='Unix time of the sale start (default: five minutes from now)',
        )
        parser.add_argument('--sale-days', type=int, default=30, help='Sale duration in days')
        parser.add_argument(
            '--withdrawal-start',
            type=int,
            help='Unix time of the vesting cliff (default: sale end)',
        )
        parser.add_argument(
            '--no-fund',
            action='store_true',
            help='Configure the sale without minting the sold token to the sale address',
        )

    def handle(self, *args, **options):
        sale_start = options['sale_start'] or int(timezone.now().timestamp()) + 300
        sale_end = sale_start + options['sale_days'] * DAY
        withdrawal_start = options['withdrawal_start'] or sale_end
        amount_to_sell = settings.TOKEN_SALE_AMOUNT_TO_SELL
        referral_percentage = settings.TOKEN_SALE_REFERRAL_REWARD_PERCENTAGE

        try:
            with transaction.atomic():
                engine = SaleEngine()
                engine.initialize(
                    options['owner'],
                    options['sale_address'],
                    options['token'],
                    options['wallet'],
                    sale_start=sale_start,
                    sale_end=sale_end,
                    withdrawal_start=withdrawal_start,
                    withdraw_period_duration=settings.TOKEN_SALE_WITHDRAW_PERIOD_DURATION,
                    withdraw_period_number=settings.TOKEN_SALE_WITHDRAW_PERIOD_NUMBER,
                    min_buy_value=settings.TOKEN_SALE_MIN_BUY_VALUE,
                    max_token_amount_per_address=settings.TOKEN_SALE_MAX_TOKEN_AMOUNT_PER_ADDRESS,
                    exchange_rate=settings.TOKEN_SALE_EXCHANGE_RATE,
                    referral_reward_percentage=referral_percentage,
                    amount_to_sell=amount_to_sell,
                    currencies=options['currencies'],
                )
                self.stdout.write(self.style.SUCCESS(
                    f'Sale configured: {sale_start} -> {sale_end}, cliff at {withdrawal_start}'
                ))

                if options['no_fund']:
                    return
                if Asset.objects.filter(identifier=options['token']).exists():
                    self.stdout.write(self.style.WARNING(
                        f"Token {options['token']} already exists, not minting"
                    ))
                    return
                # Referral bonuses are paid outside the sale cap
                supply = amount_to_sell * (100 + referral_percentage) // 100
                create_asset(
                    options['token'],
                    options['symbol'],
                    initial_supply=supply,
                    holder=options['sale_address'],
                )
                self.stdout.write(self.style.SUCCESS(
                    f"Minted {supply} {options['symbol']} to {options['sale_address']}"
                ))
        except LedgerError as e:
            raise CommandError(str(e))
