"""Store configuration."""

from django.conf import settings


def get_config():
    """Get store configuration from settings."""
    defaults = {
        # Branding
        'SITE_NAME': 'Storefront',

        # Analytics dashboard
        'BEST_SELLERS_LIMIT': 5,
        'ANALYTICS_DEFAULT_DAYS': 7,
        'ANALYTICS_MAX_DAYS': 365,

        # Seconds the category list stays cached
        'CATEGORY_CACHE_TIMEOUT': 300,
    }

    user_config = getattr(settings, 'STORE', {})
    return {**defaults, **user_config}


def get_setting(name, default=None):
    """Get a specific store setting."""
    config = get_config()
    return config.get(name, default)


def get_site_name():
    """Get the configured store name."""
    return get_setting('SITE_NAME', 'Storefront')
