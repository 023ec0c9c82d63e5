from django.apps import AppConfig


class TaskflowConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'taskflow'

    def ready(self):
        """Connect the model invariant guards"""
        from .signal_handler import signal_handler
        signal_handler.setup()
