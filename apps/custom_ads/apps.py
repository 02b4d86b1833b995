from django.apps import AppConfig


class CustomAdsConfig(AppConfig):
    name = 'apps.custom_ads'
    label = 'custom_ads'
