class TaskflowError(Exception):
    pass


class NotFoundError(TaskflowError):
    pass


class ForbiddenError(TaskflowError):
    def __init__(self, msg, task=None):
        self.message = msg
        self.task = task
        super().__init__(msg)


class ValidationError(TaskflowError):
    def __init__(self, msg):
        self.message = msg
        super().__init__(msg)


class ImmutableFieldError(ValidationError):
    def __init__(self, model, field):
        self.model = model
        self.field = field
        super().__init__(f'{model.__name__}.{field} cannot be changed after creation')
