from django.db import migrations, models
import django.db.models.deletion
import ledger.fields


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='SaleConfiguration',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('owner', models.CharField(help_text='Administrative principal allowed to configure the sale', max_length=58)),
                ('sale_address', models.CharField(help_text='Identity that custodies the sold token', max_length=58)),
                ('token', models.CharField(help_text='Identifier of the sold token', max_length=58)),
                ('wallet', models.CharField(help_text='Beneficiary collecting the payments', max_length=58)),
                ('sale_start', models.BigIntegerField(blank=True, null=True)),
                ('sale_end', models.BigIntegerField(blank=True, null=True)),
                ('withdrawal_start', models.BigIntegerField(blank=True, null=True)),
                ('withdraw_period_duration', models.PositiveBigIntegerField(default=1, help_text='Seconds per vesting period')),
                ('withdraw_period_number', models.PositiveIntegerField(default=1, help_text='Number of vesting periods')),
                ('min_buy_value', ledger.fields.TokenAmountField(help_text='Minimum payment value per purchase')),
                ('max_token_amount_per_address', ledger.fields.TokenAmountField(help_text='Cap on tokens bought by one address')),
                ('exchange_rate', ledger.fields.TokenAmountField(help_text='Tokens per payment unit, scaled by 10^18')),
                ('referral_reward_percentage', models.PositiveSmallIntegerField(default=0)),
                ('amount_to_sell', ledger.fields.TokenAmountField(help_text='Aggregate cap on tokens sold')),
                ('sold_amount', ledger.fields.TokenAmountField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Sale Configuration',
                'verbose_name_plural': 'Sale Configuration',
            },
        ),
        migrations.CreateModel(
            name='PurchaserRecord',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('account', models.CharField(max_length=58, unique=True)),
                ('claimable_amount', ledger.fields.TokenAmountField(help_text='Purchased tokens plus referral bonuses')),
                ('withdrawn_amount', ledger.fields.TokenAmountField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['created_at'],
            },
        ),
        migrations.CreateModel(
            name='AuthorizedPaymentCurrency',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('token', models.CharField(max_length=58, unique=True)),
                ('authorized_at', models.DateTimeField(auto_now_add=True)),
                ('configuration', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='currencies', to='token_sale.saleconfiguration')),
            ],
            options={
                'ordering': ['id'],
                'verbose_name_plural': 'Authorized payment currencies',
            },
        ),
    ]
