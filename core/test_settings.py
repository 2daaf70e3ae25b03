from .settings import *  # noqa F401,F403

SECRET_KEY = 'test-secret-key-not-for-production'
DEBUG = False

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']

SECURE_SSL_REDIRECT = False
SESSION_COOKIE_SECURE = False
CSRF_COOKIE_SECURE = False

P2P_PAYMENT_DEADLINE_MINUTES_DEFAULT = 15
P2P_AUTO_RELEASE_MINUTES_DEFAULT = 5

LOGGING = {
    **LOGGING,  # noqa F405
    'loggers': {
        'mainapps': {'handlers': [], 'level': 'INFO', 'propagate': True},
    },
}
