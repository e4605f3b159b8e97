"""Django app configuration for Tallyman."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class TallymanConfig(AppConfig):
    """Configuration for Tallyman app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "tallyman"
    verbose_name = _("Movimentação de Estoque")
