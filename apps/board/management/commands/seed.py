# apps/board/management/commands/seed.py

from django.core.management.base import BaseCommand, CommandError

from apps.board.exceptions import TaskError
from apps.board.models import Task
from apps.board.services import TaskService

DEMO_TASKS = [
    ('Configurar ambiente', 'Instalar dependências e rodar migrações', Task.CATEGORY_DONE),
    ('Conectar WebSocket', 'Ouvir o evento taskUpdated no frontend', Task.CATEGORY_IN_PROGRESS),
    ('Arrastar cards', 'Enviar order ao soltar o card na coluna', Task.CATEGORY_TODO),
    ('Revisar layout', '', Task.CATEGORY_TODO),
]


class Command(BaseCommand):
    help = 'Cria tarefas de demonstração para um usuário (respeitando a política de order)'

    def add_arguments(self, parser):
        parser.add_argument('--user', required=True, help='userId dono das tarefas')
        parser.add_argument('--count', type=int, default=len(DEMO_TASKS),
                            help='Quantidade de tarefas a criar')

    def handle(self, *args, **options):
        owner_id = options['user']
        count = options['count']

        if count < 1:
            raise CommandError('--count deve ser maior que zero')

        self.stdout.write(f'🌱 Criando {count} tarefa(s) para {owner_id}...')

        service = TaskService()
        for index in range(count):
            title, description, category = DEMO_TASKS[index % len(DEMO_TASKS)]
            if index >= len(DEMO_TASKS):
                title = f'{title} ({index + 1})'

            try:
                task = service.create({
                    'title': title,
                    'description': description,
                    'category': category,
                    'userId': owner_id,
                })
            except TaskError as e:
                raise CommandError(f'Erro ao criar tarefa: {e.message}')

            self.stdout.write(f'  ✅ #{task.order} {task.title} [{task.category}]')

        self.stdout.write(self.style.SUCCESS('Seed concluído!'))
