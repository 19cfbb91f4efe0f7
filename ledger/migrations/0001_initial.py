from django.db import migrations, models
import django.db.models.deletion
import ledger.fields


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Asset',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('identifier', models.CharField(help_text='Asset address', max_length=58, unique=True)),
                ('symbol', models.CharField(max_length=16)),
                ('decimals', models.PositiveSmallIntegerField(default=18)),
                ('total_supply', ledger.fields.TokenAmountField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['symbol'],
            },
        ),
        migrations.CreateModel(
            name='ContractAccount',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('app_id', models.PositiveBigIntegerField(unique=True)),
                ('address', models.CharField(max_length=58, unique=True)),
                ('label', models.CharField(blank=True, max_length=100)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['app_id'],
            },
        ),
        migrations.CreateModel(
            name='LedgerEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('source', models.CharField(help_text='App that emitted the event', max_length=32)),
                ('name', models.CharField(max_length=64)),
                ('payload', models.JSONField(default=dict)),
                ('block_time', models.BigIntegerField(help_text='Unix time of the operation that emitted the event')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['id'],
                'indexes': [models.Index(fields=['name'], name='ledger_event_name_idx'), models.Index(fields=['source', 'name'], name='ledger_event_source_name_idx')],
            },
        ),
        migrations.CreateModel(
            name='AssetHolding',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('account', models.CharField(max_length=58)),
                ('balance', ledger.fields.TokenAmountField()),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('asset', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='holdings', to='ledger.asset')),
            ],
            options={
                'indexes': [models.Index(fields=['account'], name='ledger_holding_account_idx')],
                'unique_together': {('asset', 'account')},
            },
        ),
        migrations.CreateModel(
            name='AssetAllowance',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('owner', models.CharField(max_length=58)),
                ('spender', models.CharField(max_length=58)),
                ('amount', ledger.fields.TokenAmountField()),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('asset', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='allowances', to='ledger.asset')),
            ],
            options={
                'unique_together': {('asset', 'owner', 'spender')},
            },
        ),
    ]
