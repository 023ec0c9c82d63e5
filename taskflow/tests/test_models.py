from datetime import timedelta
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db.models import ProtectedError
from django.test import TestCase
from django.utils import timezone
from taskflow.exceptions import ImmutableFieldError, ValidationError
from taskflow.models import Membership, Task, WorkEntry
from .fixtures import ProjectFixtureMixin


class TaskModelTestCase(ProjectFixtureMixin, TestCase):

    def setUp(self):
        self.create_fixtures()

    def test_project_is_immutable(self):
        self.task.project = self.other_project
        with self.assertRaises(ImmutableFieldError) as ctx:
            self.task.save()
        self.assertEqual(ctx.exception.field, 'project')
        self.assertEqual(Task.objects.get(pk=self.task.pk).project, self.project)

    def test_other_fields_are_mutable(self):
        self.task.title = 'x'
        self.task.save()
        self.assertEqual(Task.objects.get(pk=self.task.pk).title, 'x')

    def test_project_deletion_cascades(self):
        self.project.delete()
        self.assertFalse(Task.objects.filter(pk=self.task.pk).exists())
        self.assertFalse(Membership.objects.filter(member=self.member).exists())

    def test_membership_lookup(self):
        membership = Membership.objects.find_one(self.project.id, self.member.id)
        self.assertEqual(membership.member, self.member)
        self.assertIsNone(
            Membership.objects.find_one(self.project.id, self.outsider.id)
        )


class WorkEntryTestCase(ProjectFixtureMixin, TestCase):

    def setUp(self):
        self.create_fixtures()
        self.start = timezone.now()
        self.entry = WorkEntry.objects.create(
            description='Fixing',
            start_at=self.start,
            finish_at=self.start + timedelta(hours=2),
            value=3,
            user=self.member,
            task=self.task,
            task_type=self.bug,
        )

    def test_project_id_is_computed(self):
        self.assertEqual(self.entry.project_id, self.project.id)
        self.assertIsNone(WorkEntry(start_at=self.start).project_id)

    def test_open_ended_entry(self):
        entry = WorkEntry.objects.create(start_at=self.start,
                                         user=self.member,
                                         task=self.task)
        self.assertIsNone(entry.finish_at)
        entry.full_clean()

    def test_finish_before_start(self):
        entry = WorkEntry(start_at=self.start,
                          finish_at=self.start - timedelta(minutes=1),
                          user=self.member,
                          task=self.task)
        with self.assertRaises(DjangoValidationError):
            entry.full_clean()
        with self.assertRaises(ValidationError):
            entry.save()
        self.assertIsNone(entry.pk)

    def test_user_and_task_are_immutable(self):
        self.entry.user = self.performer
        with self.assertRaises(ImmutableFieldError):
            self.entry.save()

        entry = WorkEntry.objects.get(pk=self.entry.pk)
        entry.task = self.foreign_task
        with self.assertRaises(ImmutableFieldError):
            entry.save()

    def test_user_deletion_keeps_history(self):
        with self.assertRaises(ProtectedError):
            self.member.delete()
        self.assertTrue(WorkEntry.objects.filter(pk=self.entry.pk).exists())

    def test_task_deletion_cascades(self):
        self.task.delete()
        self.assertFalse(WorkEntry.objects.filter(pk=self.entry.pk).exists())
