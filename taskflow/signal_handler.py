from django.db.models.signals import pre_save
from .exceptions import ImmutableFieldError, ValidationError
from .models import Task, WorkEntry


class SignalHandler:
    """
    Guards model invariants that must hold for every save, whatever code
    path performs it.

    - Task.project cannot change once the task exists
    - WorkEntry.user and WorkEntry.task cannot change once the entry exists
    - WorkEntry.start_at must not be later than finish_at
    """

    IMMUTABLE = {
        Task: ('project_id',),
        WorkEntry: ('user_id', 'task_id'),
    }

    def __init__(self):
        self._setup = False

    def setup(self):
        if self._setup:
            return
        self._setup = True

        for model in self.IMMUTABLE:
            pre_save.connect(
                self.check_immutable,
                sender=model,
                dispatch_uid=f'taskflow-immutable-{model.__name__}',
                weak=False,
            )

        pre_save.connect(
            self.check_timespan,
            sender=WorkEntry,
            dispatch_uid='taskflow-work-entry-timespan',
            weak=False,
        )

    def check_immutable(self, sender, instance, **kwargs):
        if instance.pk is None or kwargs.get('raw', False):
            return
        attnames = self.IMMUTABLE[sender]
        current = sender.objects.filter(pk=instance.pk).values(*attnames).first()
        if current is None:
            return
        for attname in attnames:
            if current[attname] != getattr(instance, attname):
                raise ImmutableFieldError(sender, attname.replace('_id', ''))

    def check_timespan(self, sender, instance, **kwargs):
        if instance.finish_at is None:
            return
        if instance.start_at > instance.finish_at:
            raise ValidationError('finish_at must not be earlier than start_at')


signal_handler = SignalHandler()
