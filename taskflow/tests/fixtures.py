from django.contrib.auth import get_user_model
from taskflow.models import (AccessLevel, Membership, Project,
                             ProjectTaskType, Task, TaskType)


def create_user(index, **kwargs):
    User = get_user_model()
    defaults = dict(
        username=f'test{index}',
        email=f'test{index}@mail.com',
    )
    defaults.update(kwargs)
    return User.objects.create(**defaults)


class ProjectFixtureMixin:
    """A project with a performer, another member, an outsider, an
    allowed and a foreign task type, and one task"""

    access_level = AccessLevel.RED

    def create_fixtures(self):
        self.performer = create_user(1)
        self.member = create_user(2)
        self.outsider = create_user(3)

        self.project = Project.objects.create(
            name='Project1',
            access_level=self.access_level,
        )
        self.other_project = Project.objects.create(name='Project2')

        Membership.objects.create(project=self.project, member=self.performer)
        Membership.objects.create(project=self.project, member=self.member)
        Membership.objects.create(project=self.other_project,
                                  member=self.outsider,
                                  is_owner=True)

        self.bug = TaskType.objects.create(title='Bug')
        self.feature = TaskType.objects.create(title='Feature')
        ProjectTaskType.objects.create(project=self.project, task_type=self.bug)
        ProjectTaskType.objects.create(project=self.other_project,
                                       task_type=self.feature)

        self.task = Task.objects.create(
            project=self.project,
            sequence_number=1,
            title='Task1_Project1',
            performer=self.performer,
            author=self.performer,
        )
        self.foreign_task = Task.objects.create(
            project=self.other_project,
            sequence_number=2,
            title='Task2_Project2',
        )
