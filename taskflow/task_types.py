from .exceptions import NotFoundError
from .models import ProjectTaskType, TaskType


class TaskTypeService:
    """Global registry of task types and their allowance per project"""

    def find_all(self):
        return list(TaskType.objects.all())

    def create(self, data):
        return TaskType.objects.create(title=data['title'])

    def update(self, task_type_id, data):
        task_type = self._get(task_type_id)
        task_type.title = data.get('title', task_type.title)
        task_type.save()
        return task_type

    def remove(self, task_type_id):
        task_type = self._get(task_type_id)
        task_type.delete()
        return task_type

    def find_allowed(self, project_id):
        return list(TaskType.objects.filter(projects__project_id=project_id))

    def allow(self, project, task_type):
        allowance, _ = ProjectTaskType.objects.get_or_create(
            project=project,
            task_type=task_type,
        )
        return allowance

    def disallow(self, project, task_type):
        deleted, _ = ProjectTaskType.objects.filter(
            project=project,
            task_type=task_type,
        ).delete()
        return bool(deleted)

    def _get(self, task_type_id):
        try:
            return TaskType.objects.get(pk=task_type_id)
        except TaskType.DoesNotExist:
            raise NotFoundError(f'Task type {task_type_id} not found')
