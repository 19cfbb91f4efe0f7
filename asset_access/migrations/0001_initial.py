from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='MinterControl',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('owner', models.CharField(help_text='Administrative principal allowed to swap the minter', max_length=58)),
                ('token', models.CharField(help_text='Identifier of the gated token', max_length=58)),
                ('current_minter', models.CharField(blank=True, max_length=58, null=True)),
                ('new_minter', models.CharField(blank=True, max_length=58, null=True)),
                ('end_grace_period', models.BigIntegerField(default=0, help_text='Unix time after which the update may execute')),
                ('has_to_be_executed', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Minter Control',
                'verbose_name_plural': 'Minter Control',
            },
        ),
    ]
