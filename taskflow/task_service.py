import logging
from django.db import transaction
from django.db.models import Max
from .exceptions import NotFoundError
from .models import Project, Task

logger = logging.getLogger(__name__)


class TaskService:
    """Field level persistence of tasks.

    Patches are dicts produced by resolver.resolve_associations, holding
    model instances for associations and a list of users under
    "collaborators".
    """

    def find_one(self, sequence_number, project, user=None):
        task = Task.objects.find_one_by_project_id(sequence_number, project.id)
        if task is None:
            raise NotFoundError(
                f'Task #{sequence_number} not found in project {project.id}'
            )
        return task

    @transaction.atomic
    def create_by_project(self, patch, project, user):
        # Lock the project row so concurrent creations get distinct numbers
        Project.objects.select_for_update().filter(pk=project.pk).first()
        last = Task.objects.filter(project=project).aggregate(
            last=Max('sequence_number'),
        )['last'] or 0

        patch = dict(patch)
        collaborators = patch.pop('collaborators', None)
        task = Task(
            project=project,
            sequence_number=last + 1,
            author=user,
            **patch,
        )
        task.save()
        if collaborators:
            task.collaborators.set(collaborators)

        logger.info('Task #%s created in project %s by user %s',
                    task.sequence_number, project.id, user.id)
        return self._reload(task)

    @transaction.atomic
    def update_by_user(self, task, patch, user):
        patch = dict(patch)
        collaborators = patch.pop('collaborators', None)
        for attr, value in patch.items():
            setattr(task, attr, value)
        if patch:
            # Only write the patched columns, the snapshot may be stale
            update_fields = [Task._meta.get_field(attr).attname for attr in patch]
            task.save(update_fields=update_fields + ['updated_at'])
        if collaborators is not None:
            task.collaborators.set(collaborators)

        logger.info('Task #%s of project %s updated by user %s: %s',
                    task.sequence_number, task.project_id, user.id,
                    ', '.join(sorted(patch)) or 'no fields')
        return self._reload(task)

    def _reload(self, task):
        return Task.objects.with_associations().get(pk=task.pk)
