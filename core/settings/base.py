from pathlib import Path
from datetime import timedelta
from decouple import config, Csv

BASE_DIR = Path(__file__).resolve().parent.parent.parent

SECRET_KEY = config("SECRET_KEY", default="dev-only-not-secure")
DEBUG = config("DEBUG", cast=bool, default=False)
ALLOWED_HOSTS = config("DJANGO_ALLOWED_HOSTS", cast=Csv(), default="localhost,127.0.0.1")

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'corsheaders',
    'rest_framework',
    'drf_spectacular',
    'rest_framework_simplejwt.token_blacklist',
    'apps.authentication',
    'apps.audit',
    'apps.kiosks',
    'apps.campaigns',
    'apps.coupons',
    'apps.marketing',
    'apps.custom_ads',
    'apps.notifications',
    'apps.scheduler',
    'apps.billing',
    'apps.analytics',
]

MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'apps.audit.middleware.AuditContextMiddleware',
]

ROOT_URLCONF = 'core.urls'
WSGI_APPLICATION = 'core.wsgi.application'

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

# SQLite by default so tests and scripts run without MySQL
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

AUTH_USER_MODEL = 'authentication.User'
DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'

LANGUAGE_CODE = 'en-us'
TIME_ZONE = 'UTC'
USE_I18N = True
USE_TZ = True

STATIC_URL = 'static/'

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "kioskads",
    }
}

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': (
        'rest_framework_simplejwt.authentication.JWTAuthentication',
    ),
    'DEFAULT_PERMISSION_CLASSES': (
        'rest_framework.permissions.IsAuthenticated',
    ),
    'EXCEPTION_HANDLER': 'apps.common.exceptions.api_exception_handler',
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
}

SIMPLE_JWT = {
    'ACCESS_TOKEN_LIFETIME': timedelta(minutes=config("JWT_ACCESS_MINUTES", cast=int, default=60)),
    'REFRESH_TOKEN_LIFETIME': timedelta(days=config("JWT_REFRESH_DAYS", cast=int, default=7)),
    'ROTATE_REFRESH_TOKENS': True,
    'BLACKLIST_AFTER_ROTATION': True,
    'AUTH_HEADER_TYPES': ('Bearer',),
}

CORS_ALLOWED_ORIGINS = config(
    "CORS_ALLOWED_ORIGINS",
    cast=Csv(),
    default="http://localhost:5173,http://127.0.0.1:5173"
)

# Celery
REDIS_HOST = config("REDIS_HOST", default="localhost")
CELERY_BROKER_URL = config("CELERY_BROKER_URL", default=f"redis://{REDIS_HOST}:6379/0")
CELERY_RESULT_BACKEND = config("CELERY_RESULT_BACKEND", default=f"redis://{REDIS_HOST}:6379/1")
CELERY_RESULT_SERIALIZER = 'json'
CELERY_TASK_SERIALIZER = 'json'
CELERY_TIMEZONE = config("SCHEDULER_TIMEZONE", default="America/Los_Angeles")
CELERY_BEAT_SCHEDULE = {}

# Email
EMAIL_BACKEND = config("EMAIL_BACKEND", default="django.core.mail.backends.console.EmailBackend")
EMAIL_HOST = config("EMAIL_HOST", default="smtp.gmail.com")
EMAIL_PORT = config("EMAIL_PORT", cast=int, default=587)
EMAIL_HOST_USER = config("EMAIL_HOST_USER", default="")
EMAIL_HOST_PASSWORD = config("EMAIL_HOST_PASSWORD", default="")
EMAIL_USE_TLS = config("EMAIL_USE_TLS", cast=bool, default=True)
EMAIL_TIMEOUT = config("EMAIL_TIMEOUT", cast=int, default=30)

KIOSKADS_SITE_NAME = config("KIOSKADS_SITE_NAME", default="EZ Kiosk Ads")
KIOSKADS_FROM_EMAIL = config("KIOSKADS_FROM_EMAIL", default="EZ Kiosk Ads <no-reply@ezkioskads.com>")
KIOSKADS_SITE_URL = config("KIOSKADS_SITE_URL", default="http://localhost:5173")

EMAIL_QUEUE_BATCH_SIZE = config("EMAIL_QUEUE_BATCH_SIZE", cast=int, default=10)
EMAIL_QUEUE_MAX_RETRIES = config("EMAIL_QUEUE_MAX_RETRIES", cast=int, default=3)

# Custom ad uploads (Google Cloud Storage)
CUSTOM_AD_UPLOAD_BUCKET = config("CUSTOM_AD_UPLOAD_BUCKET", default="custom-ad-uploads")
CUSTOM_AD_MIN_FILE_SIZE = config("CUSTOM_AD_MIN_FILE_SIZE", cast=int, default=1024)
CUSTOM_AD_MAX_FILE_SIZE = config("CUSTOM_AD_MAX_FILE_SIZE", cast=int, default=100 * 1024 * 1024)
CUSTOM_AD_MAX_FILES = config("CUSTOM_AD_MAX_FILES", cast=int, default=20)

# Mailchimp
MAILCHIMP_API_KEY = config("MAILCHIMP_API_KEY", default="")
MAILCHIMP_AUDIENCE_ID = config("MAILCHIMP_AUDIENCE_ID", default="")
MAILCHIMP_SERVER_PREFIX = config("MAILCHIMP_SERVER_PREFIX", default="us1")
MAILCHIMP_TIMEOUT = config("MAILCHIMP_TIMEOUT", cast=int, default=10)

# Schedulers
SCHEDULER_TIMEZONE = config("SCHEDULER_TIMEZONE", default="America/Los_Angeles")
SCHEDULER_DEFAULT_TIME = config("SCHEDULER_DEFAULT_TIME", default="02:00")
CAMPAIGN_EXPIRING_DAYS = config("CAMPAIGN_EXPIRING_DAYS", cast=int, default=3)

DASHBOARD_CACHE_TIMEOUT = config("DASHBOARD_CACHE_TIMEOUT", cast=int, default=60)

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '%(asctime)s %(levelname)s %(name)s %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'loggers': {
        'django': {
            'handlers': ['console'],
            'level': config("DJANGO_LOG_LEVEL", default="INFO"),
        },
        'apps': {
            'handlers': ['console'],
            'level': config("APP_LOG_LEVEL", default="INFO"),
        },
        'tasks': {
            'handlers': ['console'],
            'level': config("APP_LOG_LEVEL", default="INFO"),
        },
    },
}
