from django.apps import AppConfig


class AdminConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.admin"
    label = "admin_app"  # Avoid conflict with django.contrib.admin
    verbose_name = "Moderation"
