"""
Django settings for contest_site project.

所有可調整的值都從環境變數讀取，開發時可放在專案根目錄的 .env。
"""

import os
from pathlib import Path

from django.utils.translation import gettext_lazy as _
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

load_dotenv(BASE_DIR / '.env')


def env_bool(name, default=False):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


SECRET_KEY = os.environ.get('DJANGO_SECRET_KEY', 'django-insecure-contest-dev-key')

DEBUG = env_bool('DJANGO_DEBUG', False)

ALLOWED_HOSTS = [h.strip() for h in os.environ.get('DJANGO_ALLOWED_HOSTS', 'localhost,127.0.0.1,testserver').split(',') if h.strip()]


# Application definition

INSTALLED_APPS = [
    'unfold',
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'rest_framework',
    'drf_spectacular',
    'tokens',
    'entries',
    'pages',
]

MIDDLEWARE = [
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.locale.LocaleMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'contest_site.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.template.context_processors.i18n',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'contest_site.wsgi.application'


# Database
# 預設 SQLite；正式環境設定 DB_ENGINE=postgresql

DB_ENGINE = os.environ.get('DB_ENGINE', 'sqlite3')

if DB_ENGINE == 'postgresql':
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.postgresql',
            'NAME': os.environ.get('DB_NAME', 'contest'),
            'USER': os.environ.get('DB_USER', 'postgres'),
            'PASSWORD': os.environ.get('DB_PASSWORD', ''),
            'HOST': os.environ.get('DB_HOST', 'localhost'),
            'PORT': os.environ.get('DB_PORT', '5432'),
            'CONN_MAX_AGE': 60,
        }
    }
else:
    DATABASES = {
        'default': {
            'ENGINE': 'django.db.backends.sqlite3',
            'NAME': os.environ.get('DB_NAME', str(BASE_DIR / 'db.sqlite3')),
            # BEGIN IMMEDIATE：交易開始即取得寫入鎖，併發的交易依序執行
            'OPTIONS': {
                'transaction_mode': 'IMMEDIATE',
                'timeout': 20,
            },
            # 多執行緒測試需要檔案型資料庫
            'TEST': {
                'NAME': str(BASE_DIR / 'test_db.sqlite3'),
            },
        }
    }

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'


# Internationalization

LANGUAGE_CODE = 'en'

LANGUAGES = [
    ('en', _('English')),
    ('si', _('Sinhala')),
]

LOCALE_PATHS = [BASE_DIR / 'locale']

TIME_ZONE = 'Asia/Colombo'

USE_I18N = True

USE_TZ = True


STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / 'staticfiles'


# REST framework

REST_FRAMEWORK = {
    'DEFAULT_SCHEMA_CLASS': 'drf_spectacular.openapi.AutoSchema',
    'DEFAULT_AUTHENTICATION_CLASSES': [],
    'DEFAULT_PERMISSION_CLASSES': ['rest_framework.permissions.AllowAny'],
    'DEFAULT_RENDERER_CLASSES': ['rest_framework.renderers.JSONRenderer'],
    'DEFAULT_PARSER_CLASSES': ['rest_framework.parsers.JSONParser'],
    'EXCEPTION_HANDLER': 'contest_site.exceptions.contest_exception_handler',
    'UNAUTHENTICATED_USER': None,
}

SPECTACULAR_SETTINGS = {
    'TITLE': 'Contest Entry API',
    'DESCRIPTION': 'Token validation and guess submission',
    'VERSION': '1.0.0',
    'SERVE_INCLUDE_SCHEMA': False,
}


# Contest

# 啟用的競賽類型：papaya（種子數量）、flower（花名）
CONTEST_TYPES = ['papaya', 'flower']

# 頁面表單使用的競賽類型
CONTEST_PAGE_VARIANT = os.environ.get('CONTEST_PAGE_VARIANT', 'flower')

# Token 驗證結果存在行程內的 LocMemCache；寫滿時淘汰 1/CULL_FREQUENCY
CACHES = {
    'default': {
        'BACKEND': 'django.core.cache.backends.locmem.LocMemCache',
    },
    'tokens': {
        'BACKEND': 'tokens.cache.backends.SweepingLocMemCache',
        'LOCATION': 'contest-tokens',
        'TIMEOUT': 60,
        'OPTIONS': {
            'MAX_ENTRIES': int(os.environ.get('CONTEST_CACHE_MAX_SIZE', 1000)),
            'CULL_FREQUENCY': 10,
            'CLEANUP_INTERVAL': int(os.environ.get('CONTEST_CACHE_CLEANUP_INTERVAL', 60)),
        },
    },
}

# 各種驗證結果的快取秒數
CACHE_TIMEOUTS = {
    'token_valid': 60,
    'token_not_found': 30,
    'token_used': 300,
    'token_not_valid': 300,
    'token_submitted': 600,
}

# (次數, 秒數)
CONTEST_RATE_LIMITS = {
    'validate_token': (15, 60),
    'submit': (5, 60),
}

CONTEST_RATE_LIMIT_MAX_TRACKED = 500


# Logging

LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'verbose': {
            'format': '[{asctime}] {levelname} {name}: {message}',
            'style': '{',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'verbose',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': 'WARNING',
    },
    'loggers': {
        'tokens': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'entries': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'pages': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
        'contest_site': {'handlers': ['console'], 'level': LOG_LEVEL, 'propagate': False},
    },
}


# Admin (unfold)

UNFOLD = {
    'SITE_TITLE': 'Contest Admin',
    'SITE_HEADER': 'Contest Admin',
}
