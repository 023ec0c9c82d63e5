import json
import logging
from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncWebsocketConsumer
from rest_framework.authtoken.models import Token
from .exceptions import ForbiddenError, NotFoundError
from .models import Membership, Project
from .serialize import json_dumps
from .websocket_router import WebsocketRouter

logger = logging.getLogger(__name__)


class UnauthorizedError(Exception):
    pass


class ProjectTaskConsumer(AsyncWebsocketConsumer):
    """
    WebSocket consumer that relays committed task updates of one project
    to a connected member.

    The client opens the socket and sends ``{"token": "<key>"}`` first.
    The consumer answers with a status message, and from then on every
    message of the project group is relayed as is.
    """
    wsrouter = WebsocketRouter()

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.user = None
        self.user_id = None
        self.project_id = None

    async def connect(self):
        """Accept any connection and just wait for a token."""
        await self.accept()

    async def receive(self, text_data=None, bytes_data=None):
        try:
            data = json.loads(text_data)
        except (TypeError, json.JSONDecodeError):
            await self.close()
            return

        if self.user:
            # Observers only listen, mutations go through the API
            return

        await self.receive_authentication(data)

    async def receive_authentication(self, data):
        token = data.get('token', None) if isinstance(data, dict) else None
        project_id = int(self.scope['url_route']['kwargs']['project_id'])

        try:
            user = await self.authenticate(token, project_id)
        except UnauthorizedError:
            return await self.send_connection_status(401, 'error/unauthorized')
        except NotFoundError:
            return await self.send_connection_status(404, 'error/not-found')
        except ForbiddenError:
            return await self.send_connection_status(403, 'error/forbidden')

        await self.start(user, project_id)

    async def start(self, user, project_id):
        self.user = user
        self.user_id = user.id
        self.project_id = project_id
        await self.wsrouter.connect(
            self.channel_layer,
            self.channel_name,
            project_id,
        )
        logger.debug('User %s observing project %s', self.user_id, project_id)
        await self.send_connection_status(200)

    @database_sync_to_async
    def authenticate(self, token, project_id):
        try:
            token = Token.objects.select_related('user').get(key=token)
        except Token.DoesNotExist:
            raise UnauthorizedError('error/unauthorized')

        if not Project.objects.filter(pk=project_id).exists():
            raise NotFoundError('error/not-found')

        if Membership.objects.find_one(project_id, token.user.id) is None:
            raise ForbiddenError('error/forbidden')

        return token.user

    async def disconnect(self, close_code=None):
        if not self.user:
            return

        await self.wsrouter.disconnect(
            self.channel_layer,
            self.channel_name,
            self.project_id,
        )

    # Called by channel layers
    async def relay(self, event):
        await self.send(text_data=json_dumps(event['payload']))

    async def send_connection_status(self, status_code, error=None):
        data = {}
        data['status_code'] = status_code
        if error:
            data['error'] = error
        close = error is not None
        await self.send(text_data=json_dumps(data), close=close)
