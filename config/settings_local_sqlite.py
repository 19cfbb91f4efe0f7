from .settings import *  # noqa

# Override database to use a local SQLite file for clean rebuild/tests
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
        'ATOMIC_REQUESTS': True,
    }
}

# Make local checks easy
DEBUG = True
ALLOWED_HOSTS = ['*']
