import logging
from . import conf
from .access import check_access, check_membership, check_move_allowed
from .broadcast import ProjectTaskGateway
from .exceptions import ForbiddenError
from .models import Task
from .pagination import Pagination, TaskList
from .resolver import resolve_associations
from .task_service import TaskService

logger = logging.getLogger(__name__)

MOVE_FIELDS = ('status', 'position')


class ProjectTaskService:
    """
    Mutations of tasks inside a project.

    Every mutating operation checks access first, then resolves the
    associations of the payload, commits through TaskService and, for
    updates, notifies the project observers once the commit succeeded.
    A failure at any step happens before the commit, so nothing is
    written.

    Read operations do no access check, visibility is governed by project
    membership upstream.
    """

    def __init__(self, task_service=None, gateway=None):
        self.task_service = task_service or TaskService()
        self.gateway = gateway or ProjectTaskGateway()

    def list(self, project_id, pagination=None):
        pagination = pagination or Pagination()
        tasks, total = Task.objects.find_all_by_project_id(pagination, project_id)
        return TaskList(tasks, total)

    def get_one(self, sequence_number, project_id):
        return Task.objects.find_one_by_project_id(sequence_number, project_id)

    def create(self, data, project, user):
        check_membership(project, user)
        patch = resolve_associations(data, project.id)
        return self.task_service.create_by_project(patch, project, user)

    def update(self, sequence_number, data, project, user):
        task = self.check_access(sequence_number, project, user,
                                 conf.update_access_level())
        patch = resolve_associations(data, project.id)
        task = self.task_service.update_by_user(task, patch, user)
        self.gateway.notify_project_of_task_update(task)
        return task

    def move(self, sequence_number, project, user, move_data):
        task = self.check_access(sequence_number, project, user,
                                 conf.move_access_level())
        if not check_move_allowed(task, user, move_data):
            logger.info('Move of task #%s in project %s refused for user %s',
                        sequence_number, project.id, user.id)
            raise ForbiddenError('This move is not allowed', task=task)
        patch = {
            key: value for key, value in move_data.items()
            if key in MOVE_FIELDS
        }
        return self.task_service.update_by_user(task, patch, user)

    def delete(self, sequence_number, project_id):
        """Delete a task by its number in the project.

        Returns the deleted task, or None if there was nothing to delete.
        """
        task = self.get_one(sequence_number, project_id)
        if task is None:
            logger.debug('Nothing to delete for task #%s in project %s',
                         sequence_number, project_id)
            return None
        Task.objects.delete_by_project_id(sequence_number, project_id)
        logger.info('Task #%s deleted from project %s',
                    sequence_number, project_id)
        return task

    def check_access(self, sequence_number, project, user, required_level):
        return check_access(sequence_number, project, user,
                            required_level=required_level,
                            task_service=self.task_service)
