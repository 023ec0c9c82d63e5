from unittest.mock import Mock, patch
from channels.layers import get_channel_layer
from django.db import DatabaseError
from django.test import SimpleTestCase, TestCase
from taskflow.broadcast import ProjectTaskGateway
from taskflow.models import AccessLevel
from taskflow.websocket_router import WebsocketRouter, get_group_name
from .fixtures import ProjectFixtureMixin


class ProjectTaskGatewayTestCase(ProjectFixtureMixin, TestCase):

    access_level = AccessLevel.GREEN

    def setUp(self):
        self.create_fixtures()
        self.router = Mock()
        self.gateway = ProjectTaskGateway(router=self.router)

    def test_payload_is_full_task_projection(self):
        self.task.type = self.bug
        self.task.save()
        self.task.collaborators.set([self.member])

        with self.captureOnCommitCallbacks(execute=True):
            self.gateway.notify_project_of_task_update(self.task)

        payload, project_id = self.router.sync_dispatch.call_args[0]
        self.assertEqual(project_id, self.project.id)
        self.assertEqual(len(payload), 1)
        serialized = payload[0]
        self.assertEqual(serialized['id'], self.task.id)
        self.assertEqual(serialized['project_id'], self.project.id)
        self.assertEqual(serialized['type'], {'id': self.bug.id, 'title': 'Bug'})
        self.assertEqual(serialized['performer']['id'], self.performer.id)
        self.assertEqual([u['id'] for u in serialized['collaborators']],
                         [self.member.id])
        self.assertEqual(serialized['_operation'], 'update')
        self.assertEqual(serialized['_instance_type'], 'taskflow.Task')
        self.assertIn('_tstamp', serialized)
        for key in ('title', 'description', 'value', 'source', 'status'):
            self.assertIn(key, serialized)

    def test_payload_reflects_committed_state(self):
        with self.captureOnCommitCallbacks(execute=True):
            self.gateway.notify_project_of_task_update(self.task)
            self.task.title = 'changed later in the transaction'
            self.task.save()
        payload, _ = self.router.sync_dispatch.call_args[0]
        self.assertEqual(payload[0]['title'], 'changed later in the transaction')

    def test_delivery_failure_is_logged_not_raised(self):
        self.router.sync_dispatch.side_effect = ConnectionError('redis is down')
        with self.assertLogs('taskflow.broadcast', level='ERROR') as logs:
            with self.captureOnCommitCallbacks(execute=True):
                self.gateway.notify_project_of_task_update(self.task)
        self.assertIn('redis is down', logs.output[0])

    @patch('taskflow.broadcast.Task.objects.with_associations',
           side_effect=DatabaseError('connection lost'))
    def test_reload_failure_is_logged_not_raised(self, with_associations):
        with self.assertLogs('taskflow.broadcast', level='ERROR') as logs:
            with self.captureOnCommitCallbacks(execute=True):
                self.gateway.notify_project_of_task_update(self.task)
        self.assertIn('connection lost', logs.output[0])
        self.router.sync_dispatch.assert_not_called()

    def test_task_deleted_before_commit_is_skipped(self):
        with self.captureOnCommitCallbacks(execute=True):
            self.gateway.notify_project_of_task_update(self.task)
            self.task.delete()
        self.router.sync_dispatch.assert_not_called()

    def test_delete_notification(self):
        with self.captureOnCommitCallbacks(execute=True):
            self.gateway.notify_project_of_task_delete(self.project.id, 7)
        payload, project_id = self.router.sync_dispatch.call_args[0]
        self.assertEqual(project_id, self.project.id)
        self.assertEqual(payload[0]['id'], 7)
        self.assertEqual(payload[0]['_operation'], 'delete')


class WebsocketRouterTestCase(SimpleTestCase):

    def test_group_names(self):
        self.assertEqual(get_group_name(3), 'taskflow_project_3')

    async def test_dispatch_reaches_group_members(self):
        layer = get_channel_layer()
        channel_name = await layer.new_channel()
        router = WebsocketRouter()
        await router.connect(layer, channel_name, 3)

        await router.dispatch([{'id': 1, 'title': 'x'}], 3)
        message = await layer.receive(channel_name)
        self.assertEqual(message['type'], 'relay')
        self.assertEqual(message['payload'], [{'id': 1, 'title': 'x'}])

        await router.disconnect(layer, channel_name, 3)
