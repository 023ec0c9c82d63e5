"""
Resolution of task mutation payloads into model-level patches.

Every association field has three states:

- ``UNSET`` (DRF's ``empty``): the field was not sent, the task keeps its
  current value
- falsy (``None``, ``0``, empty list): the association is cleared
- a value: the referenced entity is looked up inside the project

The resulting patch is a plain dict keyed by ``Task`` attribute names,
holding model instances for associations, ready to be committed by
``TaskService``.
"""
import logging
from dataclasses import dataclass, fields
from typing import Any
from rest_framework.fields import empty
from .exceptions import ValidationError
from .models import Membership, ProjectTaskType, Task, find_all_users_by_ids

logger = logging.getLogger(__name__)

UNSET = empty

SCALAR_FIELDS = ('title', 'description', 'value', 'source', 'status')


@dataclass
class TaskMutation:
    title: Any = UNSET
    description: Any = UNSET
    value: Any = UNSET
    source: Any = UNSET
    status: Any = UNSET
    type_id: Any = UNSET
    performer_id: Any = UNSET
    users: Any = UNSET

    @classmethod
    def from_data(cls, data):
        """Build a mutation from a mapping, such as validated_data of
        TaskUpdateSerializer. Keys missing from data stay UNSET,
        unknown keys are ignored."""
        if isinstance(data, cls):
            return data
        known = {f.name for f in fields(cls)}
        return cls(**{
            key: value for key, value in data.items() if key in known
        })

    def is_set(self, name):
        return getattr(self, name) is not UNSET


def resolve_associations(mutation, project_id):
    """Build a task patch from mutation, validating every referenced
    entity against project_id.

    Raises ValidationError if a non-nullable field is set to None, a task
    type is not allowed in the project, the performer is not a member of
    it, or not all collaborators exist.
    """
    mutation = TaskMutation.from_data(mutation)
    patch = {}

    for name in SCALAR_FIELDS:
        if mutation.is_set(name):
            patch[name] = _resolve_scalar(name, getattr(mutation, name))

    if mutation.is_set('type_id'):
        patch['type'] = _resolve_type(mutation.type_id, project_id)

    if mutation.is_set('performer_id'):
        patch['performer'] = _resolve_performer(mutation.performer_id, project_id)

    if mutation.is_set('users'):
        patch['collaborators'] = _resolve_collaborators(mutation.users)

    return patch


def _resolve_scalar(name, value):
    if value is None and not Task._meta.get_field(name).null:
        raise ValidationError(f'{name} cannot be null')
    return value


def _resolve_type(type_id, project_id):
    if not type_id:
        return None
    project_task_type = ProjectTaskType.objects.find_one(project_id, type_id)
    if project_task_type is None:
        logger.debug('Task type %s is not allowed in project %s',
                     type_id, project_id)
        raise ValidationError('Task type not found in this project')
    return project_task_type.task_type


def _resolve_performer(performer_id, project_id):
    if not performer_id:
        return None
    membership = Membership.objects.find_one(project_id, performer_id)
    if membership is None:
        logger.debug('User %s is not a member of project %s',
                     performer_id, project_id)
        raise ValidationError('Performer not found in this project')
    return membership.member


def _resolve_collaborators(user_ids):
    if not user_ids:
        return []
    users = find_all_users_by_ids(user_ids)
    # Set completeness only, individual missing ids are not reported
    if len(users) != len(user_ids):
        raise ValidationError('Not all users were found')
    return users
