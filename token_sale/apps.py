from django.apps import AppConfig


class TokenSaleConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'token_sale'
    verbose_name = 'Token Sale & Vesting'
