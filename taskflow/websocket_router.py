from asgiref.sync import async_to_sync
import channels.layers
from . import conf
from .serialize import to_wire


def get_group_name(project_id):
    return f'{conf.group_prefix()}_{project_id}'


class WebsocketRouter:
    """Channel layer groups of project observers.

    Every observer of a project joins one group, named after the project.
    Payloads are sent to the whole group as ``relay`` events, which the
    consumer forwards to its socket untouched.
    """

    async def connect(self, channel_layer, channel_name, project_id):
        await channel_layer.group_add(get_group_name(project_id), channel_name)

    async def disconnect(self, channel_layer, channel_name, project_id):
        await channel_layer.group_discard(get_group_name(project_id),
                                          channel_name)

    def sync_dispatch(self, payload, project_id):
        async_to_sync(self.dispatch)(payload, project_id)

    async def dispatch(self, payload, project_id):
        event = {'type': 'relay', 'payload': to_wire(payload)}
        channel_layer = channels.layers.get_channel_layer()
        await channel_layer.group_send(get_group_name(project_id), event)
