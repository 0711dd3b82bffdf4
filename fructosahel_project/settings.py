# fructosahel_project/settings.py

import os
from pathlib import Path
from dotenv import load_dotenv
from datetime import timedelta

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent

# Load environment variables from a .env file
load_dotenv(os.path.join(BASE_DIR, '.env'))


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def env_int(name, default):
    value = os.environ.get(name)
    if not value:
        return default
    return int(value)


# --- SECURITY SETTINGS ---
# The SECRET_KEY is read from an environment variable; the fallback only suits local work and tests
SECRET_KEY = os.environ.get('SECRET_KEY') or 'django-insecure-fructosahel-local-key'

# Defaults to False (production) unless DEV_MODE=True in .env
DEBUG = env_bool('DEV_MODE')

if DEBUG:
    ALLOWED_HOSTS = ['127.0.0.1', 'localhost', 'testserver']
    APP_SITE_URL = 'http://127.0.0.1:8000'
    CSRF_TRUSTED_ORIGINS = []
else:
    ALLOWED_HOSTS = [h for h in os.environ.get('ALLOWED_HOSTS', 'www.fructosahel.com,testserver').split(',') if h]
    APP_SITE_URL = os.environ.get('APP_SITE_URL', 'https://www.fructosahel.com')
    CSRF_TRUSTED_ORIGINS = [APP_SITE_URL]


# --- APPLICATION DEFINITION ---
INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'core',
    'farms',
    'tasks',
    'notifications',
    'analytics.apps.AnalyticsConfig',
    'rest_framework',
    'rest_framework_simplejwt',
    'corsheaders',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'corsheaders.middleware.CorsMiddleware',  # must stay above CommonMiddleware
    'whitenoise.middleware.WhiteNoiseMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.locale.LocaleMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'fructosahel_project.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.debug',
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'fructosahel_project.wsgi.application'


# --- DATABASE ---
DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': BASE_DIR / 'db.sqlite3',
    }
}


# --- PASSWORD VALIDATION ---
AUTH_PASSWORD_VALIDATORS = [
    {'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator'},
    {'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator'},
    {'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator'},
    {'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator'},
]


# --- INTERNATIONALIZATION & TIMEZONE ---
LANGUAGE_CODE = 'en'
LANGUAGES = [
    ('en', 'English'),
    ('fr', 'Français'),
]
TIME_ZONE = 'Africa/Ouagadougou'
USE_I18N = True
USE_TZ = True


# --- STATIC FILES ---
STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles_collected'

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# --- REST FRAMEWORK & JWT ---
REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': (
        'rest_framework_simplejwt.authentication.JWTAuthentication',
        'rest_framework.authentication.SessionAuthentication',
    ),
    'DEFAULT_PERMISSION_CLASSES': (
        'rest_framework.permissions.IsAuthenticated',
    ),
    'EXCEPTION_HANDLER': 'core.api.exception_handler',
}

SIMPLE_JWT = {
    "ACCESS_TOKEN_LIFETIME": timedelta(minutes=15),
    "REFRESH_TOKEN_LIFETIME": timedelta(days=30),
    "ROTATE_REFRESH_TOKENS": True,
    "UPDATE_LAST_LOGIN": False,
    "ALGORITHM": "HS256",
    "SIGNING_KEY": SECRET_KEY,
    "AUTH_HEADER_TYPES": ("Bearer",),
    "USER_ID_FIELD": "id",
    "USER_ID_CLAIM": "user_id",
}


# --- CORS SETTINGS ---
CORS_ALLOWED_ORIGINS = [
    'http://localhost:3000',
    'http://127.0.0.1:3000',
    'https://www.fructosahel.com',
]


# --- PUSH NOTIFICATIONS (Web Push / VAPID) ---
VAPID_PUBLIC_KEY = os.environ.get('VAPID_PUBLIC_KEY') or os.environ.get('NEXT_PUBLIC_VAPID_PUBLIC_KEY')
VAPID_PRIVATE_KEY = os.environ.get('VAPID_PRIVATE_KEY')
VAPID_SUBJECT = os.environ.get('VAPID_SUBJECT', 'mailto:admin@fructosahel.com')
PUSH_MAX_CONCURRENCY = env_int('PUSH_MAX_CONCURRENCY', 10)
PUSH_TIMEOUT_SECONDS = env_int('PUSH_TIMEOUT_SECONDS', 10)
NOTIFICATIONS_BACKGROUND_WORKERS = env_int('NOTIFICATIONS_BACKGROUND_WORKERS', 2)

# Scheduled notification jobs
CRON_SECRET = os.environ.get('CRON_SECRET')
CRON_PLATFORM_HEADER = os.environ.get('CRON_PLATFORM_HEADER', 'X-Vercel-Cron')
NOTIFICATIONS_DEDUPLICATE_SCHEDULED = env_bool('NOTIFICATIONS_DEDUPLICATE_SCHEDULED')


# --- ANALYTICS EVENT QUEUE ---
ANALYTICS_ENABLED = env_bool('ANALYTICS_ENABLED')
ANALYTICS_ENDPOINT = os.environ.get('ANALYTICS_ENDPOINT', '')
ANALYTICS_API_KEY = os.environ.get('ANALYTICS_API_KEY', '')
ANALYTICS_MAX_PENDING = env_int('ANALYTICS_MAX_PENDING', 500)
ANALYTICS_BATCH_SIZE = env_int('ANALYTICS_BATCH_SIZE', 25)
ANALYTICS_OVERFLOW_POLICY = os.environ.get('ANALYTICS_OVERFLOW_POLICY', 'drop_oldest')
ANALYTICS_BLOCK_TIMEOUT = float(os.environ.get('ANALYTICS_BLOCK_TIMEOUT', '2.0'))


# --- LOGGING ---
LOG_LEVEL = os.environ.get('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO')

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'simple': {
            'format': '[{asctime}] {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'simple',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'tasks': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'notifications': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'analytics': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'core': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
    },
}
