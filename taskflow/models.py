from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import models


class AccessLevel(models.IntegerChoices):
    """How permissive a project is for members that are not a task's
    performer. Ordered from most restrictive to fully open."""
    RED = 1, 'Red'
    YELLOW = 2, 'Yellow'
    GREEN = 3, 'Green'


class Project(models.Model):
    name = models.CharField(max_length=255)
    access_level = models.PositiveSmallIntegerField(
        choices=AccessLevel.choices,
        default=AccessLevel.RED,
    )
    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        through='Membership',
        related_name='projects',
    )
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name


class MembershipQuerySet(models.QuerySet):

    def find_one(self, project_id, member_id):
        return self.select_related('member').filter(
            project_id=project_id,
            member_id=member_id,
        ).first()


class Membership(models.Model):
    project = models.ForeignKey(Project,
                                related_name='memberships',
                                on_delete=models.CASCADE)
    member = models.ForeignKey(settings.AUTH_USER_MODEL,
                               related_name='memberships',
                               on_delete=models.CASCADE)
    access_level = models.PositiveSmallIntegerField(
        choices=AccessLevel.choices,
        default=AccessLevel.RED,
    )
    role = models.CharField(max_length=32, default='member')
    is_owner = models.BooleanField(default=False)

    objects = MembershipQuerySet.as_manager()

    class Meta:
        unique_together = ('project', 'member')

    def __str__(self):
        return f'{self.member} in {self.project}'


class TaskType(models.Model):
    title = models.CharField(max_length=64, unique=True)

    class Meta:
        ordering = ['title']

    def __str__(self):
        return self.title


class ProjectTaskTypeQuerySet(models.QuerySet):

    def find_one(self, project_id, task_type_id):
        return self.select_related('task_type').filter(
            project_id=project_id,
            task_type_id=task_type_id,
        ).first()


class ProjectTaskType(models.Model):
    """Existence of a row means the task type may be used in the project"""
    project = models.ForeignKey(Project,
                                related_name='task_types',
                                on_delete=models.CASCADE)
    task_type = models.ForeignKey(TaskType,
                                  related_name='projects',
                                  on_delete=models.CASCADE)

    objects = ProjectTaskTypeQuerySet.as_manager()

    class Meta:
        unique_together = ('project', 'task_type')


class TaskQuerySet(models.QuerySet):

    def with_associations(self):
        # type is always needed by serialization, join it explicitly
        return self.select_related(
            'type', 'performer', 'project',
        ).prefetch_related('collaborators')

    def for_project(self, project_id):
        return self.with_associations().filter(project_id=project_id)

    def find_all_by_project_id(self, pagination, project_id):
        qs = self.for_project(project_id).order_by('position', 'sequence_number')
        return list(pagination.slice(qs)), qs.count()

    def find_one_by_project_id(self, sequence_number, project_id):
        return self.for_project(project_id).filter(
            sequence_number=sequence_number,
        ).first()

    def delete_by_project_id(self, sequence_number, project_id):
        return self.filter(
            sequence_number=sequence_number,
            project_id=project_id,
        ).delete()


class Task(models.Model):
    project = models.ForeignKey(Project,
                                related_name='tasks',
                                on_delete=models.CASCADE)
    sequence_number = models.PositiveIntegerField()
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, default='')
    # Value of the task in arbitrary units
    value = models.IntegerField(null=True, blank=True)
    # May be a link to an external service or resource
    source = models.CharField(max_length=1024, null=True, blank=True)
    status = models.PositiveSmallIntegerField(default=0)
    position = models.IntegerField(default=0)
    type = models.ForeignKey(TaskType,
                             null=True,
                             blank=True,
                             related_name='tasks',
                             on_delete=models.SET_NULL)
    performer = models.ForeignKey(settings.AUTH_USER_MODEL,
                                  null=True,
                                  blank=True,
                                  related_name='performed_tasks',
                                  on_delete=models.SET_NULL)
    collaborators = models.ManyToManyField(settings.AUTH_USER_MODEL,
                                           blank=True,
                                           related_name='collaborated_tasks')
    author = models.ForeignKey(settings.AUTH_USER_MODEL,
                               null=True,
                               blank=True,
                               related_name='authored_tasks',
                               on_delete=models.SET_NULL)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TaskQuerySet.as_manager()

    class Meta:
        unique_together = ('project', 'sequence_number')
        ordering = ['project', 'sequence_number']

    def __str__(self):
        return f'#{self.sequence_number} {self.title}'


class WorkEntry(models.Model):
    """Work logged by a user against a task"""
    description = models.TextField(null=True, blank=True)
    start_at = models.DateTimeField()
    # Open-ended entries have no finish
    finish_at = models.DateTimeField(null=True, blank=True)
    value = models.IntegerField(null=True, blank=True)
    source = models.CharField(max_length=1024, null=True, blank=True)
    # Deleting a user must not delete their work history
    user = models.ForeignKey(settings.AUTH_USER_MODEL,
                             related_name='work_entries',
                             on_delete=models.PROTECT)
    task = models.ForeignKey(Task,
                             related_name='work_entries',
                             on_delete=models.CASCADE)
    task_type = models.ForeignKey(TaskType,
                                  null=True,
                                  blank=True,
                                  related_name='work_entries',
                                  on_delete=models.SET_NULL)

    class Meta:
        ordering = ['start_at']

    @property
    def project_id(self):
        if self.task_id is None:
            return None
        return self.task.project_id

    def clean(self):
        if self.finish_at is not None and self.start_at > self.finish_at:
            raise ValidationError({
                'finish_at': 'finish_at must not be earlier than start_at',
            })


def find_all_users_by_ids(ids):
    """Return the users for the given ids. Missing ids are simply absent."""
    return list(get_user_model().objects.filter(id__in=ids))
