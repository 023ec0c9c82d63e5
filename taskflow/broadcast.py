"""
Fan-out of committed task state to the observers of a project.

Notifications are deferred with ``transaction.on_commit``, so nothing is
sent for a mutation that is rolled back, and the payload is built from the
committed row. Delivery is fire-and-forget: failures are logged and never
propagate to the mutation that triggered them. Clients reconcile missed
notifications with subsequent reads.
"""
import logging
from django.db import transaction
from django.utils import timezone
from .models import Task
from .serializers import TaskSerializer
from .websocket_router import WebsocketRouter

logger = logging.getLogger(__name__)

INSTANCE_TYPE = 'taskflow.Task'


class ProjectTaskGateway:

    def __init__(self, router=None):
        self.router = router or WebsocketRouter()

    def notify_project_of_task_update(self, task):
        task_id = task.pk
        transaction.on_commit(lambda: self._relay_update(task_id))

    def notify_project_of_task_delete(self, project_id, task_id):
        payload = {
            'id': task_id,
            'project_id': project_id,
            '_instance_type': INSTANCE_TYPE,
            '_operation': 'delete',
        }
        transaction.on_commit(lambda: self._relay(payload, project_id))

    def serialize_task(self, task):
        serialized = dict(TaskSerializer(task).data)
        serialized['_instance_type'] = INSTANCE_TYPE
        serialized['_operation'] = 'update'
        return serialized

    def _relay_update(self, task_id):
        try:
            task = Task.objects.with_associations().get(pk=task_id)
        except Task.DoesNotExist:
            # Deleted after being queued but before commit
            logger.debug(
                f'Task {task_id} no longer exists at commit time, skipping broadcast'
            )
            return
        except Exception as e:
            logger.exception(f'Error loading task {task_id} for broadcast: {e}')
            return

        try:
            serialized = self.serialize_task(task)
        except Exception as e:
            logger.exception(f'Error serializing task {task_id}: {e}')
            return

        self._relay(serialized, task.project_id)

    def _relay(self, serialized, project_id):
        serialized['_tstamp'] = timezone.now()
        try:
            self.router.sync_dispatch([serialized], project_id)
        except Exception as e:
            logger.exception(
                f'Error broadcasting task {serialized.get("id")} '
                f'to project {project_id}: {e}'
            )
