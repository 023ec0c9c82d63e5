from django.core.management.base import BaseCommand, CommandError
from taskflow.broadcast import ProjectTaskGateway
from taskflow.models import Task


class Command(BaseCommand):
    help = "Send the current state of a task to all observers of its project"

    def add_arguments(self, parser):
        parser.add_argument('project_id',
                            type=int,
                            help='Project owning the task',
                            )

        parser.add_argument('sequence_number',
                            type=int,
                            help='Number of the task in the project',
                            )

    def handle(self, *args, **options):
        task = Task.objects.find_one_by_project_id(
            options['sequence_number'],
            options['project_id'],
        )
        if task is None:
            raise CommandError(
                f'Task #{options["sequence_number"]} not found in '
                f'project {options["project_id"]}'
            )
        ProjectTaskGateway().notify_project_of_task_update(task)
        self.stdout.write(self.style.SUCCESS(f'Broadcast {task}'))
