"""
Django settings for the token sale project.

Values come from the environment (or a local .env file) through decouple.
"""
from pathlib import Path

from decouple import config, Csv

from .logging import LOGGING  # noqa

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = config('SECRET_KEY', default='django-insecure-local-development-key')
DEBUG = config('DEBUG', default=False, cast=bool)
ALLOWED_HOSTS = config('ALLOWED_HOSTS', default='localhost,127.0.0.1', cast=Csv())

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'graphene_django',
    'ledger',
    'token_sale',
    'asset_access',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'config.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

DATABASES = {
    'default': {
        'ENGINE': config('DB_ENGINE', default='django.db.backends.postgresql'),
        'NAME': config('DB_NAME', default='token_sale'),
        'USER': config('DB_USER', default='postgres'),
        'PASSWORD': config('DB_PASSWORD', default=''),
        'HOST': config('DB_HOST', default='localhost'),
        'PORT': config('DB_PORT', default='5432'),
        'ATOMIC_REQUESTS': True,
    }
}

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = '/static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'

GRAPHENE = {
    'SCHEMA': 'config.schema.schema',
}

# Token sale deployment. Addresses are Algorand-style base32 identities.
TOKEN_SALE_OWNER_ADDRESS = config('TOKEN_SALE_OWNER_ADDRESS', default='')
TOKEN_SALE_ADDRESS = config('TOKEN_SALE_ADDRESS', default='')
TOKEN_SALE_TOKEN_ADDRESS = config('TOKEN_SALE_TOKEN_ADDRESS', default='')
TOKEN_SALE_TOKEN_SYMBOL = config('TOKEN_SALE_TOKEN_SYMBOL', default='TOKEN')
TOKEN_SALE_WALLET_ADDRESS = config('TOKEN_SALE_WALLET_ADDRESS', default='')
TOKEN_SALE_PAYMENT_CURRENCIES = config('TOKEN_SALE_PAYMENT_CURRENCIES', default='', cast=Csv())
TOKEN_SALE_AMOUNT_TO_SELL = config('TOKEN_SALE_AMOUNT_TO_SELL', default=1_000_000 * 10 ** 18, cast=int)
TOKEN_SALE_MIN_BUY_VALUE = config('TOKEN_SALE_MIN_BUY_VALUE', default=500 * 10 ** 18, cast=int)
TOKEN_SALE_MAX_TOKEN_AMOUNT_PER_ADDRESS = config(
    'TOKEN_SALE_MAX_TOKEN_AMOUNT_PER_ADDRESS', default=20_000 * 10 ** 18, cast=int
)
TOKEN_SALE_EXCHANGE_RATE = config('TOKEN_SALE_EXCHANGE_RATE', default=83_333_333_300_000_000_000, cast=int)
TOKEN_SALE_REFERRAL_REWARD_PERCENTAGE = config('TOKEN_SALE_REFERRAL_REWARD_PERCENTAGE', default=5, cast=int)
TOKEN_SALE_WITHDRAW_PERIOD_DURATION = config('TOKEN_SALE_WITHDRAW_PERIOD_DURATION', default=10 * 24 * 3600, cast=int)
TOKEN_SALE_WITHDRAW_PERIOD_NUMBER = config('TOKEN_SALE_WITHDRAW_PERIOD_NUMBER', default=10, cast=int)

ASSET_ACCESS_OWNER_ADDRESS = config('ASSET_ACCESS_OWNER_ADDRESS', default='')
