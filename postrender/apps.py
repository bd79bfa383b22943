from django.apps import AppConfig


class PostrenderConfig(AppConfig):
    name = 'postrender'
    verbose_name = 'Post rendering'
