from django.apps import AppConfig


class AssetAccessConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'asset_access'
    verbose_name = 'Asset Minter Access'
