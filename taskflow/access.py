import logging
from .exceptions import ForbiddenError
from .models import AccessLevel, Membership
from .task_service import TaskService

logger = logging.getLogger(__name__)


def check_membership(project, user, task=None):
    """Return the Membership of user in project.

    Raises ForbiddenError, carrying task if given, when user is not a
    member of project.
    """
    membership = Membership.objects.find_one(project.id, user.id)
    if membership is None:
        logger.info('User %s is not a member of project %s',
                    user.id, project.id)
        raise ForbiddenError('You are not a member of this project', task=task)
    return membership


def check_access(sequence_number, project, user,
                 required_level=AccessLevel.RED, task_service=None):
    """Load a task of project and check user may change it.

    user must be a member of project. Owners may always proceed. When
    project.access_level is at least required_level every member may
    proceed, otherwise only the task's performer may.

    Raises NotFoundError if the task is not in project, ForbiddenError
    carrying the task if user may not change it.
    """
    task_service = task_service or TaskService()
    task = task_service.find_one(sequence_number, project, user)
    membership = check_membership(project, user, task=task)

    if membership.is_owner:
        return task

    if project.access_level < required_level and task.performer_id != user.id:
        logger.info(
            'User %s denied on task #%s of project %s '
            '(project level %s, required %s)',
            user.id, sequence_number, project.id,
            AccessLevel(project.access_level).label,
            AccessLevel(required_level).label,
        )
        raise ForbiddenError(
            'You do not have access to edit this task',
            task=task,
        )

    return task


def check_move_allowed(task, user, move):
    """Hook for status transition and per-user move rules.

    Returns False to refuse the move. No rules are defined yet, so every
    move that passed check_access is allowed.
    """
    return True
