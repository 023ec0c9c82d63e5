from django.contrib.auth import get_user_model
from rest_framework import serializers
from .models import Task, TaskType, WorkEntry


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = get_user_model()
        fields = ('id', 'username', 'first_name', 'last_name')


class TaskTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = TaskType
        fields = ('id', 'title')


class TaskSerializer(serializers.ModelSerializer):
    """Projection of a task sent to clients and project observers"""
    type = TaskTypeSerializer(allow_null=True)
    performer = UserSerializer(allow_null=True)
    collaborators = UserSerializer(many=True)
    project_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = Task
        fields = (
            'id',
            'sequence_number',
            'title',
            'description',
            'value',
            'source',
            'status',
            'position',
            'type',
            'performer',
            'collaborators',
            'project_id',
        )


class TaskUpdateSerializer(serializers.Serializer):
    """Input for task mutations.

    Fields left out of the payload are left out of validated_data, so
    absent and null stay distinguishable downstream.
    """
    title = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    value = serializers.IntegerField(required=False, allow_null=True)
    source = serializers.CharField(max_length=1024,
                                   required=False,
                                   allow_null=True,
                                   allow_blank=True)
    status = serializers.IntegerField(required=False, min_value=0)
    type_id = serializers.IntegerField(required=False, allow_null=True)
    performer_id = serializers.IntegerField(required=False, allow_null=True)
    users = serializers.ListField(child=serializers.IntegerField(),
                                  required=False,
                                  allow_null=True,
                                  allow_empty=True)


class TaskCreateSerializer(TaskUpdateSerializer):
    title = serializers.CharField(max_length=255)


class TaskMoveSerializer(serializers.Serializer):
    status = serializers.IntegerField(required=False, min_value=0)
    position = serializers.IntegerField(required=False)


class WorkEntrySerializer(serializers.ModelSerializer):
    project_id = serializers.IntegerField(read_only=True)

    class Meta:
        model = WorkEntry
        fields = (
            'id',
            'description',
            'start_at',
            'finish_at',
            'value',
            'source',
            'user',
            'task',
            'task_type',
            'project_id',
        )

    def validate(self, attrs):
        if self.instance is not None:
            for field in ('user', 'task'):
                if field in attrs and attrs[field] != getattr(self.instance, field):
                    raise serializers.ValidationError({
                        field: 'This field cannot be changed.',
                    })
        start_at = attrs.get('start_at', getattr(self.instance, 'start_at', None))
        finish_at = attrs.get('finish_at', getattr(self.instance, 'finish_at', None))
        if start_at and finish_at and start_at > finish_at:
            raise serializers.ValidationError({
                'finish_at': 'finish_at must not be earlier than start_at',
            })
        return attrs
