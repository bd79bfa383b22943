import django
import pytest
from django.conf import settings


def pytest_configure():
    if not settings.configured:
        settings.configure(
            INSTALLED_APPS=["postrender"],
            TEMPLATES=[
                {
                    "BACKEND": "django.template.backends.django.DjangoTemplates",
                    "APP_DIRS": True,
                }
            ],
            USE_TZ=True,
        )
    django.setup()


@pytest.fixture
def settings_override():
    """Temporarily override Django settings: ``settings_override(NAME=value)``."""
    from django.test.utils import override_settings

    active = []

    def apply(**overrides):
        override = override_settings(**overrides)
        override.enable()
        active.append(override)

    yield apply

    for override in reversed(active):
        override.disable()
